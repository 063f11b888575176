"""
RecommendationEngine — the main entry point.

Single call: recommend(raw) -> RecommendationResult
Runs the stages in order over one market. Anything that goes wrong inside
the pipeline is logged and answered with the fallback result, so callers
always get a complete, renderable result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Optional

from skinmatch.config import Settings, get_settings
from skinmatch.schemas import (
    Assessment,
    BudgetSummary,
    Market,
    RecommendationResult,
    StructuredRecommendations,
)
from skinmatch.services.fallback import fallback
from skinmatch.stages.advisories import build_follow_up, build_timeline, generate_warnings
from skinmatch.stages.candidates import generate
from skinmatch.stages.conflicts import resolve_conflicts
from skinmatch.stages.constraints import apply_medical_constraints
from skinmatch.stages.normalizer import normalize
from skinmatch.stages.personalizer import personalize
from skinmatch.stages.profile import build_profile
from skinmatch.stages.routine import assemble_routine
from skinmatch.stages.scoring import score
from skinmatch.stages.structurer import structure
from skinmatch.tables.markets import get_market

logger = logging.getLogger(__name__)

VALUE_ASSESSMENTS = (
    "Excellent value - affordable products with good efficacy",
    "Good value - balanced quality and pricing",
    "Premium value - higher quality ingredients and formulations",
    "Luxury value - top-tier products with advanced formulations",
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ── Helpers ─────────────────────────────────────────────────────────────────


def assess_value(average: float, market: Market) -> str:
    """Place the average price per product against the market's tier ceilings."""
    for (_, (_, ceiling)), text in zip(market.budget_bands.items(), VALUE_ASSESSMENTS):
        if average <= ceiling:
            return text
    return VALUE_ASSESSMENTS[-1]


def summarize_budget(structured: StructuredRecommendations, market: Market) -> BudgetSummary:
    by_bucket = {
        name: sum(rec.price or 0 for rec in getattr(structured, name))
        for name in ("essential", "targeted", "supporting", "optional")
    }
    total = sum(by_bucket.values())
    count = len(structured.flatten())
    average = round(total / count, 2) if count else 0
    return BudgetSummary(
        currency=market.currency,
        total=total,
        by_bucket=by_bucket,
        average=average,
        value_assessment=assess_value(average, market) if count else "",
    )


# ── Engine ───────────────────────────────────────────────────────────────────


class RecommendationEngine:
    """Pure pipeline over one market (or the market each assessment names)."""

    def __init__(
        self,
        market: Optional[Market] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.market = market
        self.settings = settings or get_settings()
        self.clock = clock or _utc_now

    def resolve_market(self, assessment: Assessment) -> Market:
        if self.market is not None:
            return self.market
        try:
            return get_market(assessment.market)
        except KeyError:
            logger.warning(
                f"Unknown market {assessment.market!r}, using {self.settings.default_market}"
            )
            return get_market(self.settings.default_market)

    def recommend(self, raw: Any) -> RecommendationResult:
        """Full recommendation result for a raw assessment. Never raises."""
        generated_at = self.clock().isoformat()
        try:
            return self._run(raw, generated_at)
        except Exception as e:
            logger.error(f"Recommendation pipeline failed: {e}", exc_info=True)
            return fallback(
                raw,
                market=self.market,
                error=f"Recommendation generation failed: {type(e).__name__}",
                generated_at=generated_at,
                default_market=self.settings.default_market,
            )

    def _run(self, raw: Any, generated_at: str) -> RecommendationResult:
        assessment = normalize(raw, default_market=self.settings.default_market)
        market = self.resolve_market(assessment)
        profile = build_profile(assessment)

        candidates = generate(profile, market)
        candidates = apply_medical_constraints(candidates, profile, market)
        candidates = resolve_conflicts(candidates, market)
        candidates = score(candidates, profile, market)
        candidates = personalize(candidates, profile, market)
        structured = structure(candidates, profile, market)

        result = RecommendationResult(
            user_profile=profile.model_dump(mode="json"),
            generated_at=generated_at,
            market=market.code,
            currency=market.currency,
            recommendations=structured,
            routine_suggestions=assemble_routine(
                structured, profile, market, self.settings.afternoon_lifestyles
            ),
            warnings=generate_warnings(structured, profile, market),
            timeline=build_timeline(profile),
            follow_up=build_follow_up(profile),
            budget_summary=summarize_budget(structured, market),
        )
        logger.info(
            f"Generated {len(structured.flatten())} recommendations for "
            f"{profile.skin_type.value} skin in {market.code} "
            f"(primary concern: {profile.primary_concern})"
        )
        return result


class RecommendationService:
    """Async facade for callers that run inside an event loop."""

    def __init__(self, engine: Optional[RecommendationEngine] = None):
        self.engine = engine or RecommendationEngine()

    async def generate_recommendations(self, user_id: str, raw: Any) -> RecommendationResult:
        logger.info(f"Generating recommendations for user {user_id}")
        return self.engine.recommend(raw)
