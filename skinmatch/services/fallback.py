"""
Fallback path — a basic, always-valid result when the pipeline fails.

Uses the market's per-skin-type fallback list when the reference tables are
usable, and a fixed cleanser/moisturizer/sunscreen routine when they are not.
fallback() never raises.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from skinmatch.schemas import (
    Assessment,
    EntryCategory,
    Market,
    Recommendation,
    RecommendationCategory,
    RecommendationResult,
    RoutineStep,
    RoutineSuggestions,
    Severity,
    StructuredRecommendations,
    WarningNotice,
)
from skinmatch.stages.normalizer import normalize
from skinmatch.stages.personalizer import resolve_price
from skinmatch.stages.routine import is_morning_active
from skinmatch.tables import guidance
from skinmatch.tables.markets import MARKETS

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "Recommendation generation failed, using fallback recommendations"
FALLBACK_REASONING = "Safe fallback recommendation for your skin type"
FALLBACK_SCORE = 70
FALLBACK_PRIORITY = 80

# Used only when the market tables themselves cannot be read
LAST_RESORT: tuple[tuple[str, str, EntryCategory], ...] = (
    ("gentle_cleanser", "Gentle Cleanser", EntryCategory.CLEANSER),
    ("lightweight_moisturizer", "Lightweight Moisturizer", EntryCategory.MOISTURIZER),
    ("mineral_sunscreen", "Mineral Sunscreen", EntryCategory.SUNSCREEN),
)


# ── Helpers ─────────────────────────────────────────────────────────────────


def _fallback_recommendation(entry_id: str, name: str, product=None, price=None) -> Recommendation:
    return Recommendation(
        entry_id=entry_id,
        reasoning=FALLBACK_REASONING,
        category=RecommendationCategory.ESSENTIAL,
        priority=FALLBACK_PRIORITY,
        match_score=FALLBACK_SCORE,
        final_priority=FALLBACK_PRIORITY,
        display_name=name,
        product=product,
        price=price,
    )


def _basic_routine(picks: list[tuple[Recommendation, EntryCategory, bool]]) -> RoutineSuggestions:
    """Same placement as the full routine: sunscreen mornings, actives once a day."""
    morning, evening = [], []
    for category in guidance.ROUTINE_ORDER:
        for rec, pick_category, morning_active in picks:
            if pick_category is not category:
                continue
            if category is EntryCategory.SUNSCREEN:
                morning.append((rec, category))
            elif category is EntryCategory.ACTIVE:
                (morning if morning_active else evening).append((rec, category))
            else:
                morning.append((rec, category))
                evening.append((rec, category))

    def steps(ordered: list[tuple[Recommendation, EntryCategory]]) -> list[RoutineStep]:
        return [
            RoutineStep(
                step=i,
                entry_id=rec.entry_id,
                display_name=rec.product.name if rec.product else rec.display_name,
                instructions=guidance.CATEGORY_INSTRUCTIONS[category],
                timing=guidance.WAIT_TIMES[category],
                amount=guidance.APPLICATION_AMOUNTS[category],
            )
            for i, (rec, category) in enumerate(ordered, 1)
        ]

    return RoutineSuggestions(
        morning=steps(morning),
        evening=steps(evening),
        tips=list(guidance.ROUTINE_TIPS),
    )


def _result(
    user_profile: dict,
    picks: list[tuple[Recommendation, EntryCategory, bool]],
    market_code: str,
    currency: str,
    generated_at: str,
    error: str,
) -> RecommendationResult:
    return RecommendationResult(
        user_profile=user_profile,
        generated_at=generated_at,
        market=market_code,
        currency=currency,
        recommendations=StructuredRecommendations(essential=[rec for rec, _, _ in picks]),
        routine_suggestions=_basic_routine(picks),
        warnings=[
            WarningNotice(type="fallback", message=guidance.FALLBACK_WARNING, severity=Severity.MEDIUM)
        ],
        timeline=dict(guidance.FALLBACK_TIMELINE),
        error=error,
        fallback=True,
    )


def _from_tables(
    raw: Any, market: Optional[Market], default_market: str, generated_at: str, error: str
) -> RecommendationResult:
    assessment: Assessment = normalize(raw, default_market=default_market)
    if market is None:
        market = MARKETS.get(assessment.market) or MARKETS[default_market]

    band = market.band(assessment.budget_tier)
    picks = []
    for entry_id in market.fallback.get(assessment.skin_type, ()):
        entry = market.catalog.get(entry_id)
        if entry is None:
            continue
        product, price, _ = resolve_price(entry_id, market, band)
        rec = _fallback_recommendation(entry_id, entry.display_name, product, price)
        picks.append((rec, entry.category, is_morning_active(entry)))
    if not picks:
        raise ValueError(f"No fallback entries for {assessment.skin_type.value} in {market.code}")

    return _result(
        assessment.model_dump(mode="json"), picks, market.code, market.currency, generated_at, error
    )


def _last_resort(generated_at: str, error: str) -> RecommendationResult:
    picks = [
        (_fallback_recommendation(entry_id, name), category, False) for entry_id, name, category in LAST_RESORT
    ]
    return _result({}, picks, "", "", generated_at, error)


# ── Public API ───────────────────────────────────────────────────────────────


def fallback(
    raw: Any,
    market: Optional[Market] = None,
    error: str = DEFAULT_ERROR,
    generated_at: Optional[str] = None,
    default_market: str = "IN",
) -> RecommendationResult:
    """Basic essentials for the user's skin type, flagged with fallback=True."""
    if generated_at is None:
        generated_at = datetime.now(timezone.utc).isoformat()
    try:
        return _from_tables(raw, market, default_market, generated_at, error)
    except Exception as e:
        logger.error(f"Fallback tables unusable, using last-resort routine: {e}", exc_info=True)
        return _last_resort(generated_at, error)
