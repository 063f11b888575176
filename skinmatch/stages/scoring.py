"""
Scorer — weighted 0-100 match score per candidate, blended into a final priority.

    match = 0.3 * skin-type fit + 0.4 * concern fit + 0.2 * safety + 0.1 * experience fit
    final_priority = priority + match * 0.3
"""

from __future__ import annotations

import logging

from skinmatch.schemas import CatalogEntry, Market, Recommendation, SkinType, Strength, UserProfile

logger = logging.getLogger(__name__)

WEIGHTS = {"skin_type": 0.3, "concern": 0.4, "safety": 0.2, "experience": 0.1}
SCORE_BLEND = 0.3

# Fit of an entry suitable for the column skin type, for a user with the row skin type
SKIN_COMPATIBILITY: dict[str, dict[str, int]] = {
    "oily": {"combination": 70, "normal": 50, "dry": 20, "sensitive": 30},
    "dry": {"normal": 60, "sensitive": 80, "combination": 40, "oily": 20},
    "combination": {"normal": 80, "oily": 70, "dry": 50, "sensitive": 40},
    "sensitive": {"dry": 70, "normal": 60, "combination": 40, "oily": 30},
    "normal": {"combination": 80, "oily": 60, "dry": 60, "sensitive": 50},
}

STRENGTH_SCORES = {
    Strength.GENTLE: 100,
    Strength.MODERATE: 80,
    Strength.STRONG: 60,
    Strength.VERY_STRONG: 40,
}

EXPERIENCE_GAP_PENALTY = 30


def skin_type_fit(entry: CatalogEntry, skin_type: SkinType) -> float:
    if "all" in entry.suitable_for or skin_type.value in entry.suitable_for:
        return 100
    row = SKIN_COMPATIBILITY.get(skin_type.value, {})
    return max((row.get(s, 0) for s in entry.suitable_for), default=0)


def concern_fit(entry: CatalogEntry, concerns: list[str]) -> float:
    """Positional weights drop 10% per place in the prioritized list."""
    total = 0.0
    for index, concern in enumerate(concerns):
        if concern in entry.addresses:
            total += 100 * max(0.0, 1 - index * 0.1)
    return min(100.0, total)


def safety_fit(entry: CatalogEntry, sensitivity: int) -> float:
    base = STRENGTH_SCORES.get(entry.strength, 70)
    return max(0, min(100, base - max(0, (sensitivity - 5) * 10)))


def experience_fit(entry: CatalogEntry, profile: UserProfile) -> float:
    gap = entry.requires_experience.rank - profile.experience_level.rank
    if gap <= 0:
        return 100
    return max(0, 100 - gap * EXPERIENCE_GAP_PENALTY)


def match_score(entry: CatalogEntry, profile: UserProfile) -> int:
    raw = (
        WEIGHTS["skin_type"] * skin_type_fit(entry, profile.skin_type)
        + WEIGHTS["concern"] * concern_fit(entry, profile.prioritized_concerns)
        + WEIGHTS["safety"] * safety_fit(entry, profile.sensitivity)
        + WEIGHTS["experience"] * experience_fit(entry, profile)
    )
    return max(0, min(100, round(raw)))


def score(candidates: list[Recommendation], profile: UserProfile, market: Market) -> list[Recommendation]:
    scored = []
    for rec in candidates:
        value = match_score(market.catalog[rec.entry_id], profile)
        scored.append(
            rec.model_copy(update={
                "match_score": value,
                "final_priority": rec.priority + value * SCORE_BLEND,
            })
        )
    scored.sort(key=lambda rec: rec.final_priority, reverse=True)
    logger.debug(f"Scored {len(scored)} candidates")
    return scored
