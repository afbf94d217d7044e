#!/usr/bin/env python3
"""
Header Guardian - ties URL normalization, fetching and scoring together
"""
import logging
from typing import Dict, Optional

from analyzer import AnalysisResult, HeaderAnalyzer
from fetcher import HeaderFetcher, normalize_url

logger = logging.getLogger(__name__)


class HeaderGuardian:
    def __init__(self, fetcher: Optional[HeaderFetcher] = None,
                 analyzer: Optional[HeaderAnalyzer] = None):
        self.fetcher = fetcher or HeaderFetcher()
        self.analyzer = analyzer or HeaderAnalyzer()

    @classmethod
    def from_config(cls, config: Dict) -> "HeaderGuardian":
        """Build a guardian from the 'fetcher' section of a loaded config"""
        fetcher_config = config.get('fetcher', {})
        fetcher = HeaderFetcher(
            timeout=fetcher_config.get('timeout_seconds', 10),
            verify_tls=fetcher_config.get('verify_tls', False),
            follow_redirects=fetcher_config.get('follow_redirects', False),
            user_agent=fetcher_config.get('user_agent', 'HeaderGuardian/1.0'),
            ca_bundle=fetcher_config.get('ca_bundle'),
        )
        return cls(fetcher=fetcher)

    def analyze_url(self, url: str) -> AnalysisResult:
        """Normalize *url*, fetch its headers and score them.

        Raises:
            FetchError: if the target could not be fetched
        """
        target = normalize_url(url)
        headers = self.fetcher.fetch(target)
        result = self.analyzer.analyze(headers, target)
        logger.info(f"Analyzed {target}: score {result.score} ({result.grade})")
        return result
