#!/usr/bin/env python3
"""
Header Guardian - Main Application
Analyse the HTTP security headers of one or more URLs
"""
import sys
import json
import logging
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from analyzer import AnalysisResult
from fetcher import FetchError
from guardian import HeaderGuardian
from settings import load_config

logger = logging.getLogger(__name__)


def setup_logging(config: dict):
    """Configure root logging from the 'logging' config section"""
    log_config = config.get('logging', {})
    handlers = [logging.StreamHandler()]
    if log_config.get('file'):
        handlers.append(logging.FileHandler(log_config['file']))

    logging.basicConfig(
        level=getattr(logging, str(log_config.get('level', 'INFO')).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def format_report(result: AnalysisResult) -> str:
    """Render an analysis result as a plain-text report"""
    lines = [
        f"URL:   {result.url}",
        f"Score: {result.score}/100",
        f"Grade: {result.grade}",
        "",
    ]
    for check in result.summary:
        mark = "✅" if check.present else "❌"
        line = f"  {mark} {check.name:32} (weight {check.weight})"
        if check.aliases:
            line += f"  aliases: {', '.join(check.aliases)}"
        lines.append(line)
        if not check.present:
            lines.append(f"       {check.description}")
    return "\n".join(lines)


def run_server(config: dict):
    import uvicorn
    from backend.api import app

    server_config = config.get('server', {})
    host = server_config.get('host', '0.0.0.0')
    port = int(server_config.get('port', 8080))
    logger.info(f"Server starting on port {port}")
    uvicorn.run(app, host=host, port=port)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Header Guardian - Analyse HTTP security headers')
    parser.add_argument('urls', nargs='*', help='URL(s) to analyse (scheme defaults to https://)')
    parser.add_argument('--config', default=None, help='Path to config file')
    parser.add_argument('--json', action='store_true', help='Print results as JSON')
    parser.add_argument('--serve', action='store_true', help='Run the HTTP API instead')

    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(config)

    if args.serve:
        # backend/ lives next to src/
        sys.path.insert(0, str(Path(__file__).parent.parent))
        run_server(config)
        return 0

    if not args.urls:
        parser.error("at least one URL is required unless --serve is given")

    guardian = HeaderGuardian.from_config(config)

    exit_code = 0
    reports = []
    for url in args.urls:
        try:
            result = guardian.analyze_url(url)
        except FetchError as e:
            logger.error(f"Failed to analyze URL: {e}")
            exit_code = 1
            continue

        if args.json:
            reports.append(result.to_dict())
        else:
            print(format_report(result))
            print()

    if args.json and reports:
        output = reports[0] if len(args.urls) == 1 else reports
        print(json.dumps(output, indent=2))

    return exit_code


if __name__ == '__main__':
    sys.exit(main())
