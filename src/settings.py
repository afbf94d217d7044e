#!/usr/bin/env python3
"""
Configuration loading for Header Guardian
"""
import copy
import logging
import os
from pathlib import Path
from typing import Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"

DEFAULT_CONFIG: Dict = {
    "fetcher": {
        "timeout_seconds": 10,
        "verify_tls": False,
        "follow_redirects": False,
        "user_agent": "HeaderGuardian/1.0",
        "ca_bundle": None,
    },
    "server": {
        "host": "0.0.0.0",
        "port": 8080,
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


def _merge(base: Dict, override: Dict) -> Dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_path: Optional[str] = None) -> Dict:
    """Load YAML configuration merged over the built-in defaults.

    A missing file is not an error; defaults are used. The PORT environment
    variable, when set, overrides server.port.
    """
    path = Path(config_path) if config_path else CONFIG_PATH
    config = copy.deepcopy(DEFAULT_CONFIG)

    if path.exists():
        with open(path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        _merge(config, loaded)
        logger.info(f"Loaded configuration from {path}")
    else:
        logger.warning(f"Config file {path} not found, using defaults")

    port = os.environ.get("PORT")
    if port:
        config["server"]["port"] = int(port)

    return config
