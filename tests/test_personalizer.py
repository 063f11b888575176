"""Unit tests for market pricing, budget substitution and experience notes."""

import pytest

from skinmatch.schemas import (
    Assessment,
    BudgetTier,
    ExperienceLevel,
    Recommendation,
    RecommendationCategory,
    UserProfile,
)
from skinmatch.stages.personalizer import BUDGET_NOTE, personalize, resolve_price
from skinmatch.stages.profile import build_profile
from skinmatch.stages.scoring import score
from skinmatch.tables.catalog import display_name
from skinmatch.tables.markets import INDIA, UNITED_STATES


def _profile(**overrides) -> UserProfile:
    return build_profile(Assessment(**overrides))


def _scored(profile: UserProfile, *entries: tuple[str, float], **overrides) -> list[Recommendation]:
    recs = [
        Recommendation(
            entry_id=entry_id,
            reasoning="Because it helps",
            category=RecommendationCategory.TARGETED,
            priority=priority,
            display_name=display_name(entry_id),
            **overrides,
        )
        for entry_id, priority in entries
    ]
    return score(recs, profile, INDIA)


# ── Price resolution ────────────────────────────────────────────────────────


class TestResolvePrice:
    def test_first_preferred_product_within_budget(self):
        product, price, in_budget = resolve_price("gentle_cleanser", INDIA, INDIA.band(BudgetTier.BUDGET))
        assert product.id == "cetaphil_gentle_cleanser"
        assert price == 299
        assert in_budget

    def test_higher_tier_gets_the_preferred_product(self):
        product, _, _ = resolve_price("gentle_cleanser", INDIA, INDIA.band(BudgetTier.PREMIUM))
        assert product.id == "paula_choice_cleanser"

    def test_nothing_fits(self):
        product, price, in_budget = resolve_price("retinol", INDIA, INDIA.band(BudgetTier.BUDGET))
        assert product.price == 2800
        assert price == 2800
        assert not in_budget

    def test_ingredient_level_market_uses_catalog_range(self):
        band = UNITED_STATES.band(BudgetTier.BUDGET)
        assert resolve_price("niacinamide", UNITED_STATES, band) == (None, 6, True)
        assert resolve_price("peptides", UNITED_STATES, band) == (None, 18, False)

    def test_entry_without_products_in_product_market(self):
        # No retail product listed for peptides in India: fall back to the range
        product, price, in_budget = resolve_price("peptides", INDIA, INDIA.band(BudgetTier.PREMIUM))
        assert product is None
        assert price == 900
        assert in_budget


# ── Personalize ─────────────────────────────────────────────────────────────


class TestPersonalize:
    def test_prices_are_attached(self):
        profile = _profile(budget_tier=BudgetTier.BUDGET)
        result = personalize(_scored(profile, ("niacinamide", 85)), profile, INDIA)
        assert result[0].product.name == "Minimalist Niacinamide 10%"
        assert result[0].price == 349
        assert not result[0].budget_adjusted

    def test_over_budget_entry_gets_budget_alternative(self):
        profile = _profile(
            budget_tier=BudgetTier.BUDGET,
            experience_level=ExperienceLevel.INTERMEDIATE,
            concerns=["acne"],
        )
        result = personalize(_scored(profile, ("retinol", 90)), profile, INDIA)
        assert len(result) == 1
        alt = result[0]
        assert alt.entry_id == "niacinamide"
        assert alt.display_name == "Niacinamide Serum"
        assert alt.budget_adjusted
        assert alt.reasoning == f"Because it helps {BUDGET_NOTE}"
        assert alt.price == 349
        # re-scored for the substitute, not carried over from retinol
        assert alt.match_score == 100

    def test_dropped_when_alternative_already_present(self):
        profile = _profile(budget_tier=BudgetTier.BUDGET, experience_level=ExperienceLevel.INTERMEDIATE)
        result = personalize(_scored(profile, ("retinol", 90), ("niacinamide", 85)), profile, INDIA)
        assert [r.entry_id for r in result] == ["niacinamide"]

    def test_dropped_when_no_alternative(self):
        profile = _profile(budget_tier=BudgetTier.BUDGET, experience_level=ExperienceLevel.EXPERT)
        result = personalize(_scored(profile, ("bakuchiol", 90), ("hyaluronic_acid", 80)), profile, INDIA)
        assert [r.entry_id for r in result] == ["hyaluronic_acid"]

    def test_alternative_for_a_treatment(self):
        profile = _profile(budget_tier=BudgetTier.BUDGET)
        result = personalize(_scored(profile, ("peptides", 80)), profile, INDIA)
        assert [r.entry_id for r in result] == ["centella_asiatica"]
        assert result[0].product is None
        assert result[0].price == 450

    def test_medically_required_bypasses_budget(self):
        profile = _profile(budget_tier=BudgetTier.BUDGET, experience_level=ExperienceLevel.INTERMEDIATE)
        recs = _scored(profile, ("retinol", 100), medically_required=True)
        result = personalize(recs, profile, INDIA)
        assert result[0].entry_id == "retinol"
        assert result[0].price == 2800

    def test_everything_kept_is_within_budget(self):
        profile = _profile(budget_tier=BudgetTier.BUDGET, experience_level=ExperienceLevel.EXPERT)
        entries = [("retinol", 95), ("vitamin_c", 90), ("peptides", 85), ("ceramide_cream", 80),
                   ("rich_moisturizer", 75), ("mineral_sunscreen", 70)]
        _, ceiling = INDIA.band(BudgetTier.BUDGET)
        for rec in personalize(_scored(profile, *entries), profile, INDIA):
            assert rec.price is not None and rec.price <= ceiling

    def test_sorted_by_final_priority(self):
        profile = _profile(budget_tier=BudgetTier.LUXURY, experience_level=ExperienceLevel.EXPERT)
        result = personalize(_scored(profile, ("hyaluronic_acid", 60), ("niacinamide", 90)), profile, INDIA)
        priorities = [r.final_priority for r in result]
        assert priorities == sorted(priorities, reverse=True)


class TestExperienceNotes:
    def test_intermediate_entry_for_beginner(self):
        profile = _profile()
        result = personalize(_scored(profile, ("vitamin_c", 80)), profile, INDIA)
        assert result[0].reasoning.endswith("(introduce gradually)")

    def test_advanced_entry_for_intermediate(self):
        profile = _profile(budget_tier=BudgetTier.LUXURY, experience_level=ExperienceLevel.INTERMEDIATE)
        result = personalize(_scored(profile, ("benzoyl_peroxide", 80)), profile, INDIA)
        assert result[0].reasoning.endswith("(requires careful introduction)")

    def test_no_note_when_experienced_enough(self):
        profile = _profile(experience_level=ExperienceLevel.ADVANCED)
        result = personalize(_scored(profile, ("vitamin_c", 80)), profile, INDIA)
        assert result[0].reasoning == "Because it helps"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
