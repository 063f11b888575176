"""
ConstraintFilter — apply hard medical rules to the candidate list.

For each known condition: candidates matching an ``avoid`` tag are removed
(or swapped for a listed safe alternative), then ``required`` entries are
forced in at priority 100 and flagged ``medically_required``. A required
entry always wins over another condition's avoid tag. Unknown conditions
are ignored.
"""

from __future__ import annotations

import logging

from skinmatch.schemas import (
    ESSENTIAL_CATEGORIES,
    CatalogEntry,
    Market,
    Recommendation,
    RecommendationCategory,
    UserProfile,
)
from skinmatch.tables.catalog import display_name
from skinmatch.tables.rules import MEDICAL_RULES, SAFE_ESSENTIALS

logger = logging.getLogger(__name__)

REQUIRED_PRIORITY = 100


def matches_avoid(entry: CatalogEntry, avoid) -> bool:
    """True if the entry id, its category or any active tag is in ``avoid``."""
    tags = {entry.id, entry.category.value, *entry.active_ingredients}
    return not tags.isdisjoint(avoid)


def _required(entry_id: str, reasoning: str) -> Recommendation:
    return Recommendation(
        entry_id=entry_id,
        reasoning=reasoning,
        category=RecommendationCategory.ESSENTIAL,
        priority=REQUIRED_PRIORITY,
        medically_required=True,
        display_name=display_name(entry_id),
    )


def _remove_avoided(result, condition, rule, market: Market) -> list[Recommendation]:
    kept: list[Recommendation] = []
    for rec in result:
        entry = market.catalog[rec.entry_id]
        if rec.medically_required or not matches_avoid(entry, rule.avoid):
            kept.append(rec)
            continue

        swap_id = rule.safe_alternatives.get(rec.entry_id)
        present = {r.entry_id for r in result} | {r.entry_id for r in kept}
        if (
            swap_id
            and swap_id in market.catalog
            and swap_id not in present
            and not matches_avoid(market.catalog[swap_id], rule.avoid)
        ):
            kept.append(
                rec.model_copy(update={
                    "entry_id": swap_id,
                    "display_name": display_name(swap_id),
                    "reasoning": f"Safe alternative to {entry.display_name} ({condition})",
                })
            )
            logger.debug(f"{condition}: swapped {rec.entry_id} for {swap_id}")
        else:
            logger.debug(f"{condition}: removed {rec.entry_id}")
    return kept


def _add_required(result, condition, rule, market: Market) -> list[Recommendation]:
    result = list(result)
    for entry_id in rule.required:
        if entry_id not in market.catalog:
            logger.debug(f"{condition}: required entry {entry_id} not offered in {market.code}")
            continue
        existing = next((i for i, r in enumerate(result) if r.entry_id == entry_id), None)
        if existing is not None:
            rec = result[existing]
            result[existing] = rec.model_copy(update={
                "medically_required": True,
                "priority": max(rec.priority, REQUIRED_PRIORITY),
            })
            continue

        # A required essential replaces the generator's pick for that category
        category = market.catalog[entry_id].category
        if category in ESSENTIAL_CATEGORIES:
            result = [
                r for r in result
                if r.medically_required or market.catalog[r.entry_id].category != category
            ]
        result.append(_required(entry_id, f"Required for {condition.replace('_', ' ')} management"))
    return result


def _restore_essentials(result, forbidden: set[str], market: Market) -> list[Recommendation]:
    """Re-add a safe default for any essential category the rules emptied."""
    present = {market.catalog[r.entry_id].category for r in result}
    for category in ESSENTIAL_CATEGORIES:
        if category in present:
            continue
        entry_id = SAFE_ESSENTIALS[category]
        entry = market.catalog.get(entry_id)
        if entry is None or matches_avoid(entry, forbidden):
            logger.info(f"No safe {category.value} substitute available; essential bucket degraded")
            continue
        result.append(_required(entry_id, f"Safe {category.value} substitute for your skin condition"))
    return result


def apply_medical_constraints(
    candidates: list[Recommendation], profile: UserProfile, market: Market
) -> list[Recommendation]:
    if not profile.medical_conditions:
        return list(candidates)

    result = list(candidates)
    forbidden: set[str] = set()
    for condition in profile.medical_conditions:
        rule = MEDICAL_RULES.get(condition)
        if rule is None:
            logger.debug(f"No medical rule for '{condition}', ignoring")
            continue
        forbidden.update(rule.avoid)
        result = _remove_avoided(result, condition, rule, market)
        result = _add_required(result, condition, rule, market)

    return _restore_essentials(result, forbidden, market)
