"""OutputStructurer — bucket the final list and cap each bucket by experience.

The essential cap never drops the last cleanser, moisturizer or sunscreen;
other buckets keep their highest-ranked entries.
"""

from __future__ import annotations

import logging

from skinmatch.schemas import (
    ESSENTIAL_CATEGORIES,
    ExperienceLevel,
    Market,
    Recommendation,
    RecommendationCategory,
    StructuredRecommendations,
    UserProfile,
)

logger = logging.getLogger(__name__)

BUCKET_LIMITS: dict[ExperienceLevel, dict[str, int]] = {
    ExperienceLevel.BEGINNER: {"essential": 4, "targeted": 2, "supporting": 1, "optional": 0},
    ExperienceLevel.INTERMEDIATE: {"essential": 4, "targeted": 3, "supporting": 2, "optional": 1},
    ExperienceLevel.ADVANCED: {"essential": 5, "targeted": 4, "supporting": 3, "optional": 2},
    ExperienceLevel.EXPERT: {"essential": 5, "targeted": 5, "supporting": 4, "optional": 3},
}


def bucket_for(rec: Recommendation, market: Market) -> str:
    """First match wins: essential, targeted, supporting, optional."""
    if (
        rec.medically_required
        or rec.category is RecommendationCategory.ESSENTIAL
        or market.catalog[rec.entry_id].category in ESSENTIAL_CATEGORIES
    ):
        return "essential"
    score = rec.match_score or 0
    if rec.category is RecommendationCategory.TARGETED or score > 80:
        return "targeted"
    if score > 60:
        return "supporting"
    return "optional"


def _cap_essentials(items: list[Recommendation], limit: int, market: Market) -> list[Recommendation]:
    """Keep the best entry of each essential category, then fill by rank."""
    keep: set[int] = set()
    covered = set()
    for i, rec in enumerate(items):
        category = market.catalog[rec.entry_id].category
        if category in ESSENTIAL_CATEGORIES and category not in covered:
            covered.add(category)
            keep.add(i)
    for i in range(len(items)):
        if len(keep) >= limit:
            break
        keep.add(i)
    return [rec for i, rec in enumerate(items) if i in keep]


def structure(
    recommendations: list[Recommendation], profile: UserProfile, market: Market
) -> StructuredRecommendations:
    buckets: dict[str, list[Recommendation]] = {
        "essential": [], "targeted": [], "supporting": [], "optional": [],
    }
    for rec in recommendations:
        buckets[bucket_for(rec, market)].append(rec)

    limits = BUCKET_LIMITS[profile.experience_level]
    for name, items in buckets.items():
        if len(items) > limits[name]:
            logger.debug(f"Trimmed {name} bucket from {len(items)} to {limits[name]}")
            if name == "essential":
                buckets[name] = _cap_essentials(items, limits[name], market)
            else:
                buckets[name] = items[: limits[name]]
    return StructuredRecommendations(**buckets)
