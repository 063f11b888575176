"""
Personalizer — fit the scored list to the user's budget and experience.

Each entry is priced in the user's market: the first preferred product that
fits the budget ceiling, or the entry's catalog price range when the market
has no products for it. Over-budget entries get one same-category budget
alternative, or are dropped. Medically required entries always stay.
"""

from __future__ import annotations

import logging
from typing import Optional

from skinmatch.schemas import ExperienceLevel, Market, Product, Recommendation, UserProfile
from skinmatch.stages.conflicts import has_conflict
from skinmatch.stages.scoring import SCORE_BLEND, match_score
from skinmatch.tables.conflicts import BUDGET_ALTERNATIVES

logger = logging.getLogger(__name__)

BUDGET_NOTE = "(budget-friendly alternative)"


def resolve_price(
    entry_id: str, market: Market, band: tuple[float, float]
) -> tuple[Optional[Product], Optional[float], bool]:
    """Return (product, price, in_budget) for an entry in a market."""
    floor, ceiling = band
    products = market.products.get(entry_id)
    if products:
        for product in products:
            if floor <= product.price <= ceiling:
                return product, product.price, True
        cheapest = min(products, key=lambda p: p.price)
        return cheapest, cheapest.price, False

    price_range = market.catalog[entry_id].price_range(market.code)
    if price_range is None:
        return None, None, False
    low, high = price_range
    in_budget = low <= ceiling and high >= floor
    return None, max(low, floor) if in_budget else low, in_budget


def _experience_note(rec: Recommendation, profile: UserProfile, market: Market) -> Recommendation:
    required = market.catalog[rec.entry_id].requires_experience
    user = profile.experience_level
    if required is ExperienceLevel.INTERMEDIATE and user is ExperienceLevel.BEGINNER:
        note = "(introduce gradually)"
    elif required.rank >= ExperienceLevel.ADVANCED.rank and user.rank < required.rank:
        note = "(requires careful introduction)"
    else:
        return rec
    return rec.model_copy(update={"reasoning": f"{rec.reasoning} {note}"})


def _budget_alternative(
    rec: Recommendation,
    candidates: list[Recommendation],
    taken: set[str],
    profile: UserProfile,
    market: Market,
    band: tuple[float, float],
) -> Optional[Recommendation]:
    alt_id = BUDGET_ALTERNATIVES.get(rec.entry_id)
    if not alt_id or alt_id in taken or alt_id not in market.catalog:
        return None
    alt = market.catalog[alt_id]
    if alt.category != market.catalog[rec.entry_id].category:
        return None

    product, price, in_budget = resolve_price(alt_id, market, band)
    if not in_budget:
        return None
    other_tags: set[str] = set()
    for other in candidates:
        if other.entry_id != rec.entry_id:
            other_tags |= market.catalog[other.entry_id].conflict_tags
    if alt.conflict_tags and has_conflict(alt.conflict_tags, other_tags):
        return None

    value = match_score(alt, profile)
    return rec.model_copy(update={
        "entry_id": alt_id,
        "display_name": alt.display_name,
        "reasoning": f"{rec.reasoning} {BUDGET_NOTE}",
        "budget_adjusted": True,
        "product": product,
        "price": price,
        "match_score": value,
        "final_priority": rec.priority + value * SCORE_BLEND,
    })


def personalize(candidates: list[Recommendation], profile: UserProfile, market: Market) -> list[Recommendation]:
    band = market.band(profile.budget_tier)
    taken = {rec.entry_id for rec in candidates}
    kept: list[Recommendation] = []

    for rec in candidates:
        product, price, in_budget = resolve_price(rec.entry_id, market, band)
        if in_budget or rec.medically_required:
            priced = rec.model_copy(update={"product": product, "price": price})
            kept.append(_experience_note(priced, profile, market))
            continue

        alt = _budget_alternative(rec, candidates, taken, profile, market, band)
        if alt is None:
            logger.debug(f"Dropped {rec.entry_id}: over {profile.budget_tier.value} budget")
            continue
        taken.add(alt.entry_id)
        kept.append(_experience_note(alt, profile, market))
        logger.debug(f"Budget: replaced {rec.entry_id} with {alt.entry_id}")

    kept.sort(key=lambda rec: rec.final_priority or 0, reverse=True)
    return kept
