#!/usr/bin/env python3
"""
HTTP Security Header Analyzer

Scores a set of HTTP response headers against a fixed catalog of security
headers: HSTS, X-Content-Type-Options, X-Frame-Options, CSP, Referrer-Policy,
Permissions-Policy, COOP and CORP. Only presence is checked, not values.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Tuple

from requests.structures import CaseInsensitiveDict

logger = logging.getLogger(__name__)

# Header weights account for at most 70 points, HTTPS for 30
HEADER_POINTS = 70
HTTPS_POINTS = 30
CRITICAL_BONUS_MAX = 10
IMPORTANT_BONUS_MAX = 5
MAX_SCORE = 100

GRADE_THRESHOLDS = [
    (80, "A"),
    (65, "B"),
    (45, "C"),
    (25, "D"),
    (0,  "F"),
]


class Tier(Enum):
    CRITICAL = "critical"        # Must have for good security
    IMPORTANT = "important"      # Should have for good security
    RECOMMENDED = "recommended"  # Nice to have for excellent security


@dataclass(frozen=True)
class HeaderSpec:
    """Catalog entry for one security header"""
    name: str
    description: str
    weight: int
    tier: Tier
    aliases: Tuple[str, ...] = ()


SECURITY_HEADERS: Tuple[HeaderSpec, ...] = (
    # Critical
    HeaderSpec(
        name="Strict-Transport-Security",
        description="Forces HTTPS connections to protect against man-in-the-middle attacks.",
        weight=20,
        tier=Tier.CRITICAL,
    ),
    HeaderSpec(
        name="X-Content-Type-Options",
        description="Prevents MIME-sniffing attacks by enforcing declared content types.",
        weight=15,
        tier=Tier.CRITICAL,
    ),
    HeaderSpec(
        name="X-Frame-Options",
        description="Protects against clickjacking by controlling iframe embedding.",
        weight=15,
        tier=Tier.CRITICAL,
    ),
    # Important
    HeaderSpec(
        name="Content-Security-Policy",
        description="Helps prevent XSS attacks by defining allowed content sources.",
        weight=20,
        tier=Tier.IMPORTANT,
        aliases=("Content-Security-Policy-Report-Only",),
    ),
    HeaderSpec(
        name="Referrer-Policy",
        description="Controls how much referrer information is shared with requests.",
        weight=15,
        tier=Tier.IMPORTANT,
    ),
    # Recommended
    HeaderSpec(
        name="Permissions-Policy",
        description="Controls which browser features and APIs can be used.",
        weight=10,
        tier=Tier.RECOMMENDED,
        aliases=("Feature-Policy",),
    ),
    HeaderSpec(
        name="Cross-Origin-Opener-Policy",
        description="Prevents cross-origin attacks by isolating browsing context.",
        weight=8,
        tier=Tier.RECOMMENDED,
    ),
    HeaderSpec(
        name="Cross-Origin-Resource-Policy",
        description="Protects resources from being loaded by other origins.",
        weight=7,
        tier=Tier.RECOMMENDED,
    ),
)


@dataclass(frozen=True)
class HeaderCheck:
    """Presence of one catalog header in a response"""
    name: str
    present: bool
    description: str
    weight: int
    aliases: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        data = {
            "name": self.name,
            "present": self.present,
            "description": self.description,
            "weight": self.weight,
        }
        if self.aliases:
            data["aliases"] = list(self.aliases)
        return data


@dataclass(frozen=True)
class AnalysisResult:
    headers: Dict[str, bool]
    score: int                              # 0-100
    grade: str                              # A/B/C/D/F
    summary: List[HeaderCheck] = field(default_factory=list)
    url: str = ""

    def to_dict(self) -> Dict:
        return {
            "headers": dict(self.headers),
            "score": self.score,
            "grade": self.grade,
            "summary": [check.to_dict() for check in self.summary],
            "url": self.url,
        }


def score_to_grade(score: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def is_header_present(headers: Mapping[str, str], spec: HeaderSpec) -> bool:
    """Check the canonical name, then each alias, for a non-empty value.

    Header names are matched case-insensitively.
    """
    if not isinstance(headers, CaseInsensitiveDict):
        headers = CaseInsensitiveDict(headers)

    for name in (spec.name,) + tuple(spec.aliases):
        if headers.get(name):
            return True
    return False


class HeaderAnalyzer:
    def __init__(self, catalog: Tuple[HeaderSpec, ...] = SECURITY_HEADERS):
        self.catalog = tuple(catalog)

    def analyze(self, headers: Mapping[str, str], url: str) -> AnalysisResult:
        """Score response headers fetched from *url*.

        Args:
            headers: Response headers (any mapping; lookup is case-insensitive)
            url: The normalized URL the headers were fetched from

        Returns:
            AnalysisResult with presence map, score, grade and summary
        """
        lookup = CaseInsensitiveDict(headers)

        presence: Dict[str, bool] = {}
        summary: List[HeaderCheck] = []
        total_weight = 0
        achieved_weight = 0
        tier_counts = {tier: 0 for tier in Tier}

        for spec in self.catalog:
            present = is_header_present(lookup, spec)
            presence[spec.name] = present
            summary.append(HeaderCheck(
                name=spec.name,
                present=present,
                description=spec.description,
                weight=spec.weight,
                aliases=spec.aliases,
            ))

            total_weight += spec.weight
            if present:
                achieved_weight += spec.weight
                tier_counts[spec.tier] += 1

        header_score = 0
        if total_weight > 0:
            header_score = (achieved_weight * HEADER_POINTS) // total_weight

        https_score = HTTPS_POINTS if url.startswith("https://") else 0

        score = header_score + https_score
        score += self._critical_bonus(tier_counts[Tier.CRITICAL])
        score += self._important_bonus(tier_counts[Tier.IMPORTANT])
        score = min(score, MAX_SCORE)

        grade = score_to_grade(score)
        logger.debug(
            "Scored %s: headers=%d https=%d critical=%d important=%d -> %d (%s)",
            url, header_score, https_score,
            tier_counts[Tier.CRITICAL], tier_counts[Tier.IMPORTANT], score, grade,
        )

        return AnalysisResult(
            headers=presence,
            score=score,
            grade=grade,
            summary=summary,
            url=url,
        )

    # ------------------------------------------------------------------
    # Tier bonuses
    # ------------------------------------------------------------------

    @staticmethod
    def _critical_bonus(count: int) -> int:
        # 1 -> 3, 2 -> 6, 3 -> 10
        if count <= 0:
            return 0
        return min(CRITICAL_BONUS_MAX, (count * CRITICAL_BONUS_MAX) // 3)

    @staticmethod
    def _important_bonus(count: int) -> int:
        # 1 -> 2, 2 -> 5
        if count <= 0:
            return 0
        return min(IMPORTANT_BONUS_MAX, (count * IMPORTANT_BONUS_MAX) // 2)
