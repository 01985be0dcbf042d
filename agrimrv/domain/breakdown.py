"""Score breakdown classification and improvement ranking"""

import logging
from typing import Dict, List, Mapping, NamedTuple
from agrimrv.domain.models import (
    CategoryInput,
    ImpactTier,
    Recommendation,
    ScoreBreakdownEntry,
    TrendDirection,
)
from agrimrv.utils.numeric import clamp, finite_or_zero, round_half_up

logger = logging.getLogger(__name__)

HIGH_IMPACT_PERCENT = 25.0
MEDIUM_IMPACT_PERCENT = 15.0
FALLBACK_ICON = "help-circle"


class CategoryInfo(NamedTuple):
    display_name: str
    icon: str


CATEGORIES: Dict[str, CategoryInfo] = {
    "rice_farming": CategoryInfo("Rice AWD Practices", "rice"),
    "agroforestry": CategoryInfo("Agroforestry System", "tree"),
    "evidence_quality": CategoryInfo("Evidence Collection", "camera"),
    "gps_verification": CategoryInfo("GPS Verification", "map-marker"),
    "declaration_completion": CategoryInfo("Declaration Completion", "file-document"),
}

IMPROVEMENTS: Dict[str, Recommendation] = {
    "evidence_quality": Recommendation(
        category_key="evidence_quality",
        title="Upload More Crop Photos",
        description="Increase your AI verification score by uploading high-quality crop photos regularly.",
        potential_impact="Potential impact: +15-25 points",
    ),
    "declaration_completion": Recommendation(
        category_key="declaration_completion",
        title="Complete Farm Records",
        description="Fill in missing harvest data and farm management details to improve data completeness.",
        potential_impact="Potential impact: +10-20 points",
    ),
    "rice_farming": Recommendation(
        category_key="rice_farming",
        title="Maintain Consistency",
        description="Keep documenting harvests regularly to build a strong consistency track record.",
        potential_impact="Potential impact: +5-15 points",
    ),
    "agroforestry": Recommendation(
        category_key="agroforestry",
        title="Expand Tree Cover",
        description="Record tree planting and density on your agroforestry plots to grow sequestration credit.",
        potential_impact="Potential impact: +5-15 points",
    ),
    "gps_verification": Recommendation(
        category_key="gps_verification",
        title="Verify Plot Boundaries",
        description="Trace your plot boundary on the map so evidence can be matched to your land.",
        potential_impact="Potential impact: +5-10 points",
    ),
}

CONNECT_WITH_BANKS = Recommendation(
    category_key="",
    title="Connect with Banks",
    description="Share your profile with partner banks to unlock better loan opportunities.",
    potential_impact="Unlock lending opportunities",
)

_TIER_ORDER = {ImpactTier.HIGH: 0, ImpactTier.MEDIUM: 1, ImpactTier.LOW: 2}


def category_info(category_key: str) -> CategoryInfo:
    """Display name and icon for a category, falling back to the raw key"""
    return CATEGORIES.get(category_key) or CategoryInfo(category_key, FALLBACK_ICON)


def impact_tier(impact_percent: float) -> ImpactTier:
    impact = finite_or_zero(impact_percent)
    if impact >= HIGH_IMPACT_PERCENT:
        return ImpactTier.HIGH
    if impact >= MEDIUM_IMPACT_PERCENT:
        return ImpactTier.MEDIUM
    return ImpactTier.LOW


def trend_direction(trend_label: str) -> TrendDirection:
    if trend_label == "excellent":
        return TrendDirection.UP
    if trend_label == "good":
        return TrendDirection.STABLE
    return TrendDirection.DOWN


def classify(
    category_key: str,
    raw_score: float,
    impact_percent: float,
    trend_label: str,
) -> ScoreBreakdownEntry:
    """
    Build the display entry for one scoring category.

    Unknown category keys are not rejected: they are labelled with the key
    itself and a neutral icon, and a warning is logged so upstream data
    issues stay visible.
    """
    recognized = category_key in CATEGORIES
    if not recognized:
        logger.warning("Unrecognized score category", extra={"category_key": category_key})
    info = category_info(category_key)

    label = trend_label if isinstance(trend_label, str) else ""

    return ScoreBreakdownEntry(
        category_key=category_key,
        display_name=info.display_name,
        icon=info.icon,
        raw_score=round_half_up(clamp(finite_or_zero(raw_score))),
        impact_percent=finite_or_zero(impact_percent),
        impact_tier=impact_tier(impact_percent),
        trend_label=label,
        trend_direction=trend_direction(label),
        recognized=recognized,
    )


def classify_all(categories: Mapping[str, CategoryInput]) -> List[ScoreBreakdownEntry]:
    """Classify every category present in the input, preserving its order"""
    return [
        classify(key, item.raw_score, item.impact_percent, item.trend_label)
        for key, item in categories.items()
    ]


def rank_improvements(entries: List[ScoreBreakdownEntry]) -> List[Recommendation]:
    """
    Order improvement actions by where points are easiest to gain.

    High-impact categories come first, then the weakest score within a tier.
    Categories already at the maximum score and unrecognized categories are
    skipped. The bank-sharing suggestion always closes the list.
    """
    candidates = [
        e for e in entries
        if e.recognized and e.raw_score < e.max_score and e.category_key in IMPROVEMENTS
    ]
    candidates.sort(key=lambda e: (_TIER_ORDER[e.impact_tier], e.raw_score))

    recommendations = [IMPROVEMENTS[e.category_key] for e in candidates]
    recommendations.append(CONNECT_WITH_BANKS)
    return recommendations
