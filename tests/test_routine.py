"""Unit tests for routine assembly."""

import pytest

from skinmatch.schemas import (
    Assessment,
    Climate,
    ExperienceLevel,
    Recommendation,
    RecommendationCategory,
    SkinType,
    StructuredRecommendations,
    UserProfile,
)
from skinmatch.stages.profile import build_profile
from skinmatch.stages.routine import assemble_routine, routine_tips, usage_instructions, wants_afternoon
from skinmatch.tables import guidance
from skinmatch.tables.catalog import CATALOG, display_name
from skinmatch.tables.markets import INDIA


def _profile(**overrides) -> UserProfile:
    defaults = dict(experience_level=ExperienceLevel.INTERMEDIATE)
    defaults.update(overrides)
    return build_profile(Assessment(**defaults))


def _structured(*entry_ids: str) -> StructuredRecommendations:
    return StructuredRecommendations(essential=[
        Recommendation(
            entry_id=entry_id,
            reasoning="test",
            category=RecommendationCategory.ESSENTIAL,
            priority=90,
            display_name=display_name(entry_id),
        )
        for entry_id in entry_ids
    ])


FULL = (
    "mineral_sunscreen",
    "retinol",
    "lightweight_moisturizer",
    "vitamin_c",
    "gentle_cleanser",
    "hyaluronic_acid",
)


class TestSchedule:
    def test_step_order_and_placement(self):
        routine = assemble_routine(_structured(*FULL), _profile(), INDIA, lifestyles=[])
        assert [s.entry_id for s in routine.morning] == [
            "gentle_cleanser", "vitamin_c", "hyaluronic_acid", "lightweight_moisturizer", "mineral_sunscreen",
        ]
        assert [s.entry_id for s in routine.evening] == [
            "gentle_cleanser", "retinol", "hyaluronic_acid", "lightweight_moisturizer",
        ]
        assert [s.step for s in routine.morning] == [1, 2, 3, 4, 5]

    def test_sunscreen_never_in_the_evening(self):
        routine = assemble_routine(_structured(*FULL), _profile(), INDIA, lifestyles=[])
        assert "mineral_sunscreen" not in [s.entry_id for s in routine.evening]

    def test_steps_carry_timing_and_amount(self):
        routine = assemble_routine(_structured(*FULL), _profile(), INDIA, lifestyles=[])
        sunscreen = routine.morning[-1]
        assert sunscreen.timing == guidance.WAIT_TIMES[CATALOG["mineral_sunscreen"].category]
        assert sunscreen.amount == "1/4 teaspoon for face and neck"

    def test_product_name_is_displayed_when_resolved(self):
        structured = _structured("gentle_cleanser")
        product = INDIA.products["gentle_cleanser"][0]
        structured.essential[0] = structured.essential[0].model_copy(update={"product": product})
        routine = assemble_routine(structured, _profile(), INDIA, lifestyles=[])
        assert routine.morning[0].display_name == product.name


class TestAfternoon:
    def test_outdoor_lifestyle(self):
        routine = assemble_routine(_structured(*FULL), _profile(lifestyle="outdoor"), INDIA)
        assert len(routine.afternoon) == 1
        assert routine.afternoon[0].entry_id == "mineral_sunscreen"
        assert routine.afternoon[0].timing == guidance.AFTERNOON_TIMING
        assert routine.afternoon[0].instructions == guidance.AFTERNOON_INSTRUCTIONS

    def test_hot_climate(self):
        assert wants_afternoon(_profile(climate=Climate.HOT_DRY), lifestyles=[])

    def test_indoor_moderate_has_no_afternoon(self):
        routine = assemble_routine(_structured(*FULL), _profile(), INDIA)
        assert routine.afternoon == []

    def test_lifestyles_override(self):
        assert wants_afternoon(_profile(lifestyle="office"), lifestyles=["office"])
        assert not wants_afternoon(_profile(lifestyle="outdoor"), lifestyles=["office"])

    def test_no_sunscreen_no_afternoon(self):
        routine = assemble_routine(_structured("gentle_cleanser"), _profile(lifestyle="outdoor"), INDIA)
        assert routine.afternoon == []


class TestInstructions:
    def test_entry_text_preferred(self):
        assert usage_instructions(CATALOG["vitamin_c"], _profile()) == "Use once daily in the morning routine"

    def test_category_text_when_entry_has_none(self):
        entry = CATALOG["retinol"].model_copy(update={"id": "other_retinoid", "instructions": ""})
        assert usage_instructions(entry, _profile()) == guidance.CATEGORY_INSTRUCTIONS[entry.category]

    def test_beginner_retinol(self):
        text = usage_instructions(CATALOG["retinol"], _profile(experience_level=ExperienceLevel.BEGINNER))
        assert text.startswith(guidance.RETINOL_BEGINNER_INSTRUCTIONS)
        assert text.endswith(guidance.BEGINNER_ACTIVE_NOTE)

    def test_patch_test_for_sensitive_users(self):
        assert usage_instructions(CATALOG["vitamin_c"], _profile(sensitivity=8)).endswith(
            guidance.PATCH_TEST_NOTE
        )
        assert guidance.PATCH_TEST_NOTE not in usage_instructions(
            CATALOG["hyaluronic_acid"], _profile(sensitivity=8)
        )


class TestTips:
    def test_beginner_and_sensitive_tips(self):
        tips = routine_tips(_profile(experience_level=ExperienceLevel.BEGINNER, skin_type=SkinType.SENSITIVE))
        assert set(guidance.BEGINNER_TIPS) <= set(tips)
        assert set(guidance.SENSITIVE_TIPS) <= set(tips)

    def test_humid_tips(self):
        assert set(guidance.HUMID_TIPS) <= set(routine_tips(_profile(climate=Climate.HOT_HUMID)))

    def test_general_tips_only(self):
        assert routine_tips(_profile()) == list(guidance.ROUTINE_TIPS)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
