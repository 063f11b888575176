"""
CandidateGenerator — propose recommendations from the static rule tables.

Sub-generators run independently and are concatenated in a fixed order
(essentials, concerns, skin type, age, climate). The first occurrence of an
entry wins; later duplicates are dropped.
"""

from __future__ import annotations

import logging

from skinmatch.schemas import (
    ESSENTIAL_CATEGORIES,
    Market,
    Recommendation,
    RecommendationCategory,
    UserProfile,
)
from skinmatch.tables.catalog import display_name
from skinmatch.tables.rules import (
    AGE_CANDIDATES,
    AGE_PRIORITY,
    CLIMATE_CANDIDATES,
    CLIMATE_PRIORITY,
    CONCERN_BASE_PRIORITY,
    CONCERN_POSITION_STEP,
    CONCERN_RULES,
    ESSENTIAL_RULES,
    SKIN_TYPE_CANDIDATES,
    SKIN_TYPE_PRIORITY,
    ConcernRule,
    EssentialRule,
)

logger = logging.getLogger(__name__)


def _candidate(entry_id: str, reasoning: str, category: RecommendationCategory, priority: float):
    return Recommendation(
        entry_id=entry_id,
        reasoning=reasoning,
        category=category,
        priority=priority,
        display_name=display_name(entry_id),
    )


# ── Essentials ──────────────────────────────────────────────────────────────


def _essential_matches(rule: EssentialRule, profile: UserProfile) -> bool:
    if rule.is_default:
        return True
    return (
        profile.skin_type in rule.skin_types
        or profile.climate in rule.climates
        or any(c in profile.prioritized_concerns for c in rule.concerns)
        or (rule.sensitivity_above is not None and profile.sensitivity > rule.sensitivity_above)
    )


def essential_candidates(profile: UserProfile) -> list[Recommendation]:
    """One cleanser, one moisturizer and one sunscreen, always."""
    picks = []
    for category in ESSENTIAL_CATEGORIES:
        rule = next(r for r in ESSENTIAL_RULES[category] if _essential_matches(r, profile))
        picks.append(
            _candidate(rule.entry_id, rule.reasoning, RecommendationCategory.ESSENTIAL, rule.priority)
        )
    return picks


# ── Concerns ────────────────────────────────────────────────────────────────


def _concern_rule_applies(rule: ConcernRule, profile: UserProfile) -> bool:
    if profile.experience_level.rank < rule.min_experience.rank:
        return False
    if rule.max_sensitivity is not None and profile.sensitivity > rule.max_sensitivity:
        return False
    if rule.min_age is not None and profile.age < rule.min_age:
        return False
    if rule.requires_condition and rule.requires_condition not in profile.medical_conditions:
        return False
    return True


def concern_candidates(profile: UserProfile) -> list[Recommendation]:
    picks = []
    for index, concern in enumerate(profile.prioritized_concerns):
        base = CONCERN_BASE_PRIORITY - index * CONCERN_POSITION_STEP
        for rule in CONCERN_RULES.get(concern, ()):
            if _concern_rule_applies(rule, profile):
                picks.append(_candidate(rule.entry_id, rule.reasoning, rule.category, base + rule.offset))
    return picks


# ── Per-dimension tables ────────────────────────────────────────────────────


def _within_experience(entry_ids, profile: UserProfile, market: Market) -> list[str]:
    """Entries from a dimension table that the user is experienced enough for."""
    level = profile.experience_level.rank
    return [
        entry_id
        for entry_id in entry_ids
        if entry_id in market.catalog
        and market.catalog[entry_id].requires_experience.rank <= level
    ]


def skin_type_candidates(profile: UserProfile, market: Market) -> list[Recommendation]:
    skin = profile.skin_type.value
    return [
        _candidate(e, f"Recommended for {skin} skin type", RecommendationCategory.SKIN_TYPE,
                   SKIN_TYPE_PRIORITY)
        for e in _within_experience(SKIN_TYPE_CANDIDATES.get(profile.skin_type, ()), profile, market)
    ]


def age_candidates(profile: UserProfile, market: Market) -> list[Recommendation]:
    bracket = profile.age_bracket.value.replace("_", " ")
    return [
        _candidate(e, f"Age-appropriate ingredient for your {bracket}",
                   RecommendationCategory.AGE_BASED, AGE_PRIORITY)
        for e in _within_experience(AGE_CANDIDATES.get(profile.age_bracket, ()), profile, market)
    ]


def climate_candidates(profile: UserProfile, market: Market) -> list[Recommendation]:
    climate = profile.climate.value.replace("_", " ")
    return [
        _candidate(e, f"Suitable for {climate} climate", RecommendationCategory.CLIMATE,
                   CLIMATE_PRIORITY)
        for e in _within_experience(CLIMATE_CANDIDATES.get(profile.climate, ()), profile, market)
    ]


# ── Public API ──────────────────────────────────────────────────────────────


def deduplicate(candidates: list[Recommendation]) -> list[Recommendation]:
    """Keep the first occurrence of each entry id."""
    seen: set[str] = set()
    unique = []
    for rec in candidates:
        if rec.entry_id in seen:
            continue
        seen.add(rec.entry_id)
        unique.append(rec)
    return unique


def generate(profile: UserProfile, market: Market) -> list[Recommendation]:
    candidates = [
        *essential_candidates(profile),
        *concern_candidates(profile),
        *skin_type_candidates(profile, market),
        *age_candidates(profile, market),
        *climate_candidates(profile, market),
    ]
    offered = [rec for rec in candidates if rec.entry_id in market.catalog]
    if len(offered) < len(candidates):
        missing = sorted({r.entry_id for r in candidates} - market.catalog.keys())
        logger.debug(f"Skipped entries not offered in {market.code}: {missing}")
    unique = deduplicate(offered)
    logger.debug(f"Generated {len(unique)} candidates ({len(candidates)} before de-duplication)")
    return unique
