"""
End-to-end tests for the recommendation engine.

Tests cover:
  Scenarios: oily/acne beginner on a budget, eczema
  Properties: determinism, conflict-freedom, essential coverage, budget respect
  Boundary: fallback on any stage failure, market resolution, payload shape
"""

from datetime import datetime, timezone
from itertools import combinations, product

import pytest

from skinmatch import RecommendationEngine, RecommendationService
from skinmatch.config import Settings
from skinmatch.schemas import (
    ESSENTIAL_CATEGORIES,
    BudgetTier,
    EntryCategory,
    ExperienceLevel,
    Recommendation,
    RecommendationCategory,
    SkinType,
    StructuredRecommendations,
)
from skinmatch.services.engine import VALUE_ASSESSMENTS, assess_value, summarize_budget
from skinmatch.services.fallback import fallback
from skinmatch.stages.conflicts import has_conflict
from skinmatch.tables.markets import INDIA, UNITED_STATES, get_market
from skinmatch.tables.rules import MEDICAL_RULES

FIXED_TIME = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


# ── Fixtures ────────────────────────────────────────────────────────────────


def _engine(**overrides) -> RecommendationEngine:
    defaults = dict(settings=Settings(), clock=lambda: FIXED_TIME)
    defaults.update(overrides)
    return RecommendationEngine(**defaults)


def _oily_beginner(**overrides) -> dict:
    defaults = {
        "skin_type": "oily",
        "concerns": ["acne"],
        "budget": "budget",
        "experience": "beginner",
        "sensitivity": 5,
    }
    defaults.update(overrides)
    return defaults


def _eczema(**overrides) -> dict:
    defaults = {
        "skin_type": "dry",
        "concerns": ["dryness"],
        "medical_conditions": ["eczema"],
        "experience": "intermediate",
    }
    defaults.update(overrides)
    return defaults


def _ids(recs) -> list[str]:
    return [rec.entry_id for rec in recs]


PROFILES = [
    _oily_beginner(),
    _eczema(),
    {"skin_type": "normal", "concerns": ["acne", "aging", "hyperpigmentation", "texture"],
     "experience": "expert", "budget": "luxury", "age": 45},
    {"skin_type": "sensitive", "concerns": ["sensitivity"], "medical_conditions": ["rosacea"],
     "sensitivity": 9, "location": "Chennai"},
    {"skin_type": "combination", "concerns": ["aging", "acne"], "medical_conditions": ["melasma"],
     "experience": "advanced", "market": "US", "budget": "premium"},
    {"skin_type": "oily", "concerns": ["aging", "pores"], "medical_conditions": ["pregnancy"],
     "experience": "intermediate", "age": 33, "gender": "female"},
    {},
]


# ── Scenarios ───────────────────────────────────────────────────────────────


class TestScenarios:
    def test_oily_acne_beginner_on_budget(self):
        result = _engine().recommend(_oily_beginner())
        recs = result.recommendations

        assert set(_ids(recs.essential)) == {
            "salicylic_acid_cleanser", "lightweight_moisturizer", "mineral_sunscreen",
        }
        assert _ids(recs.targeted) == ["niacinamide"]
        assert recs.targeted[0].product.name == "Minimalist Niacinamide 10%"
        for rec in recs.flatten():
            assert INDIA.catalog[rec.entry_id].requires_experience == ExperienceLevel.BEGINNER
            assert rec.price <= 500

        assert result.currency == "INR"
        assert result.budget_summary.total == 1396
        assert result.budget_summary.average == 349
        assert result.budget_summary.value_assessment == VALUE_ASSESSMENTS[0]

        types = [w.type for w in result.warnings]
        assert "general" in types and "beginner" in types
        assert result.follow_up.reassessment_period == "3 months"
        assert result.timeline["week_1_2"].startswith("Start with cleanser")

        routine = result.routine_suggestions
        assert _ids(routine.morning) == ["salicylic_acid_cleanser", "lightweight_moisturizer", "mineral_sunscreen"]
        assert _ids(routine.evening) == ["salicylic_acid_cleanser", "niacinamide", "lightweight_moisturizer"]
        assert routine.afternoon == []

    def test_eczema(self):
        result = _engine().recommend(_eczema())
        flat = result.recommendations.flatten()

        assert not any(INDIA.catalog[r.entry_id].category == EntryCategory.ACTIVE for r in flat)
        required = {r.entry_id for r in flat if r.medically_required}
        assert {"gentle_cleanser", "ceramide_cream", "mineral_sunscreen"} <= required
        assert "medical" in [w.type for w in result.warnings]
        assert result.follow_up.reassessment_period == "6 months"

    def test_user_profile_snapshot(self):
        result = _engine().recommend(_oily_beginner(goals=["minimize_pores"]))
        assert result.user_profile["prioritized_concerns"] == ["acne", "pores"]
        assert result.user_profile["skin_type"] == "oily"
        assert result.generated_at == FIXED_TIME.isoformat()


# ── Properties ──────────────────────────────────────────────────────────────


class TestProperties:
    def test_deterministic(self):
        engine = _engine()
        for raw in PROFILES:
            assert engine.recommend(raw).to_payload() == engine.recommend(raw).to_payload()

    @pytest.mark.parametrize("raw", PROFILES)
    def test_conflict_free(self, raw):
        result = _engine().recommend(raw)
        market = get_market(result.market)
        for a, b in combinations(result.recommendations.flatten(), 2):
            assert not has_conflict(
                market.catalog[a.entry_id].conflict_tags, market.catalog[b.entry_id].conflict_tags
            ), f"{a.entry_id} conflicts with {b.entry_id}"

    @pytest.mark.parametrize("raw", PROFILES)
    def test_no_fallback_for_valid_input(self, raw):
        assert not _engine().recommend(raw).fallback

    @pytest.mark.parametrize(
        "skin_type,budget,market",
        list(product(list(SkinType), list(BudgetTier), ["IN", "US"])),
    )
    def test_essentials_present_and_within_budget(self, skin_type, budget, market):
        raw = {"skin_type": skin_type.value, "budget": budget.value, "market": market, "concerns": ["acne"]}
        result = _engine().recommend(raw)
        flat = result.recommendations.flatten()
        m = get_market(market)

        categories = {m.catalog[r.entry_id].category for r in flat}
        assert set(ESSENTIAL_CATEGORIES) <= categories

        _, ceiling = m.band(budget)
        assert all(r.price is not None and r.price <= ceiling for r in flat)

    @pytest.mark.parametrize(
        "conditions,experience",
        list(product(list(combinations(MEDICAL_RULES, 2)), list(ExperienceLevel))),
    )
    def test_essential_bucket_survives_several_conditions(self, conditions, experience):
        raw = {"skin_type": "normal", "medical_conditions": list(conditions), "experience": experience.value}
        result = _engine().recommend(raw)
        categories = {INDIA.catalog[r.entry_id].category for r in result.recommendations.essential}
        assert not result.fallback
        assert set(ESSENTIAL_CATEGORIES) <= categories

    def test_match_scores_in_range(self):
        for raw in PROFILES:
            for rec in _engine().recommend(raw).recommendations.flatten():
                assert 0 <= rec.match_score <= 100


# ── Boundary ────────────────────────────────────────────────────────────────


class TestFallback:
    def test_stage_failure_returns_fallback(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("scorer exploded")

        monkeypatch.setattr("skinmatch.services.engine.score", boom)
        result = _engine().recommend(_oily_beginner())

        assert result.fallback
        assert "RuntimeError" in result.error
        assert result.generated_at == FIXED_TIME.isoformat()
        assert _ids(result.recommendations.essential) == [
            "salicylic_acid_cleanser", "niacinamide", "lightweight_moisturizer", "chemical_sunscreen",
        ]
        assert all(r.match_score == 70 for r in result.recommendations.essential)
        assert result.warnings[0].type == "fallback"
        assert _ids(result.routine_suggestions.morning) == [
            "salicylic_acid_cleanser", "lightweight_moisturizer", "chemical_sunscreen",
        ]
        assert _ids(result.routine_suggestions.evening) == [
            "salicylic_acid_cleanser", "niacinamide", "lightweight_moisturizer",
        ]

        payload = result.to_payload()
        assert payload["fallback"] is True
        assert payload["error"] == result.error

    def test_last_resort_when_tables_are_broken(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("broken")

        monkeypatch.setattr("skinmatch.services.engine.generate", boom)
        monkeypatch.setattr("skinmatch.services.fallback.normalize", boom)
        result = _engine().recommend(_oily_beginner())

        assert result.fallback
        assert _ids(result.recommendations.essential) == [
            "gentle_cleanser", "lightweight_moisturizer", "mineral_sunscreen",
        ]
        assert len(result.routine_suggestions.morning) == 3

    def test_fallback_prices_in_market(self):
        result = fallback({"skin_type": "dry", "budget": "budget"}, market=UNITED_STATES)
        assert result.currency == "USD"
        assert all(r.price is not None for r in result.recommendations.essential)

    @pytest.mark.parametrize("market", [INDIA, UNITED_STATES], ids=lambda m: m.code)
    @pytest.mark.parametrize("skin_type", list(SkinType))
    def test_every_fallback_entry_gets_a_routine_step(self, market, skin_type):
        result = fallback({"skin_type": skin_type.value}, market=market)
        routine = result.routine_suggestions
        placed = set(_ids(routine.morning)) | set(_ids(routine.evening))
        assert placed == set(_ids(result.recommendations.essential))

    def test_morning_active_in_fallback_routine(self):
        result = fallback({"skin_type": "normal"}, market=UNITED_STATES)
        assert _ids(result.routine_suggestions.morning) == [
            "gentle_cleanser", "vitamin_c", "lightweight_moisturizer", "mineral_sunscreen",
        ]
        assert "vitamin_c" not in _ids(result.routine_suggestions.evening)

    @pytest.mark.parametrize("raw", [None, "garbage", 12, {"sensitivity": object()}])
    def test_garbage_input_is_absorbed(self, raw):
        result = _engine().recommend(raw)
        assert not result.fallback
        assert result.recommendations.essential


class TestMarkets:
    def test_assessment_market(self):
        assert _engine().recommend({"market": "US"}).currency == "USD"

    def test_explicit_engine_market_wins(self):
        assert _engine(market=UNITED_STATES).recommend({"market": "IN"}).market == "US"

    def test_settings_default_market(self):
        assert _engine(settings=Settings(default_market="US")).recommend({}).market == "US"

    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("SKINMATCH_DEFAULT_MARKET", "US")
        assert Settings().default_market == "US"


class TestPayload:
    def test_success_payload_shape(self):
        payload = _engine().recommend(_oily_beginner()).to_payload()
        assert "error" not in payload and "fallback" not in payload
        assert "afternoon" not in payload["routine_suggestions"]
        assert set(payload["recommendations"]) == {"essential", "targeted", "supporting", "optional"}

    def test_afternoon_included_when_present(self):
        payload = _engine().recommend(_oily_beginner(lifestyle="outdoor")).to_payload()
        assert payload["routine_suggestions"]["afternoon"]

    def test_budget_average_keeps_cents(self):
        def rec(entry_id, price):
            return Recommendation(
                entry_id=entry_id, reasoning="test", category=RecommendationCategory.ESSENTIAL,
                priority=90, price=price,
            )

        structured = StructuredRecommendations(essential=[
            rec("gentle_cleanser", 12.5), rec("lightweight_moisturizer", 13), rec("mineral_sunscreen", 12.5),
            rec("niacinamide", 13),
        ])
        summary = summarize_budget(structured, UNITED_STATES)
        assert summary.total == 51
        assert summary.average == 12.75
        assert summary.currency == "USD"

    @pytest.mark.parametrize("average,expected", [(349, 0), (1200, 1), (2500, 2), (5000, 3), (20000, 3)])
    def test_value_assessment(self, average, expected):
        assert assess_value(average, INDIA) == VALUE_ASSESSMENTS[expected]


class TestService:
    @pytest.mark.anyio
    async def test_async_wrapper_matches_engine(self):
        engine = _engine()
        service = RecommendationService(engine)
        result = await service.generate_recommendations("user-1", _oily_beginner())
        assert result.to_payload() == engine.recommend(_oily_beginner()).to_payload()


# ── Run with: pytest tests/test_engine.py -v ────────────────────────────────

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
