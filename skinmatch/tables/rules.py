"""
Declarative rule tables for profile building, candidate generation and
medical constraints.

Adding a concern, condition or essential variant is a data change here,
not a code change in the stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from skinmatch.schemas import (
    AgeBracket,
    Climate,
    EntryCategory,
    ExperienceLevel,
    RecommendationCategory,
    SkinType,
)

_X = ExperienceLevel
_R = RecommendationCategory


# ── Profile tables ───────────────────────────────────────────────────────────

CONCERN_PRIORITY: dict[str, int] = {
    "cystic_acne": 100,
    "sun_damage": 95,
    "acne": 90,
    "sensitivity": 85,
    "aging": 80,
    "hyperpigmentation": 75,
    "dryness": 70,
    "oiliness": 65,
    "texture": 60,
    "pores": 55,
}

GOAL_TO_CONCERN: dict[str, str] = {
    "clear_acne": "acne",
    "anti_aging": "aging",
    "brighten_skin": "hyperpigmentation",
    "even_skin_tone": "hyperpigmentation",
    "hydrate_skin": "dryness",
    "minimize_pores": "pores",
    "control_oil": "oiliness",
    "smooth_texture": "texture",
    "calm_skin": "sensitivity",
    "sun_protection": "sun_damage",
}

# Representative age in years for each bracket
AGE_YEARS: dict[AgeBracket, int] = {
    AgeBracket.TEENS: 16,
    AgeBracket.TWENTIES: 25,
    AgeBracket.THIRTIES: 35,
    AgeBracket.FORTIES: 45,
    AgeBracket.FIFTIES_PLUS: 55,
}

HORMONAL_CONDITIONS = {"cystic_acne", "melasma", "pcos"}


# ── Essentials ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EssentialRule:
    """One branch of an essential-category choice.

    A rule with no conditions is the category default. Otherwise it matches
    when ANY of its conditions holds.
    """

    entry_id: str
    priority: int
    reasoning: str
    skin_types: tuple[SkinType, ...] = ()
    climates: tuple[Climate, ...] = ()
    concerns: tuple[str, ...] = ()
    sensitivity_above: Optional[int] = None

    @property
    def is_default(self) -> bool:
        return not (self.skin_types or self.climates or self.concerns or self.sensitivity_above)


# Evaluated top to bottom per category; first match wins
ESSENTIAL_RULES: dict[EntryCategory, tuple[EssentialRule, ...]] = {
    EntryCategory.CLEANSER: (
        EssentialRule(
            "gentle_cleanser", 100,
            "Essential gentle daily cleanser suitable for sensitive skin",
            skin_types=(SkinType.SENSITIVE,), sensitivity_above=7,
        ),
        EssentialRule(
            "salicylic_acid_cleanser", 95,
            "BHA cleanser to control oil and prevent breakouts",
            skin_types=(SkinType.OILY,), concerns=("acne",),
        ),
        EssentialRule(
            "gentle_cleanser", 90,
            "Essential daily cleanser for healthy skin maintenance",
        ),
    ),
    EntryCategory.MOISTURIZER: (
        EssentialRule(
            "rich_moisturizer", 95,
            "Rich moisturizer for dry skin and harsh climate protection",
            skin_types=(SkinType.DRY,), climates=(Climate.COLD, Climate.HOT_DRY),
        ),
        EssentialRule(
            "lightweight_moisturizer", 90,
            "Daily moisturizer for hydration without heaviness",
        ),
    ),
    EntryCategory.SUNSCREEN: (
        EssentialRule(
            "mineral_sunscreen", 100,
            "Gentle mineral sun protection for reactive skin",
            skin_types=(SkinType.SENSITIVE,), sensitivity_above=7,
        ),
        EssentialRule(
            "chemical_sunscreen", 100,
            "Lightweight sun protection that stays comfortable in heat and humidity",
            climates=(Climate.HOT_HUMID,),
        ),
        EssentialRule(
            "mineral_sunscreen", 100,
            "Daily sun protection to prevent aging and damage",
        ),
    ),
}


# ── Concern-based candidates ─────────────────────────────────────────────────


@dataclass(frozen=True)
class ConcernRule:
    """A candidate proposed for a concern.

    Priority is ``90 - position*10 + offset`` where position is the concern's
    index in the prioritized list. Gates that fail skip the candidate.
    """

    entry_id: str
    reasoning: str
    offset: int = 0
    category: RecommendationCategory = _R.TARGETED
    min_experience: ExperienceLevel = _X.BEGINNER
    max_sensitivity: Optional[int] = None
    min_age: Optional[int] = None
    requires_condition: Optional[str] = None


CONCERN_BASE_PRIORITY = 90
CONCERN_POSITION_STEP = 10

CONCERN_RULES: dict[str, tuple[ConcernRule, ...]] = {
    "acne": (
        ConcernRule("salicylic_acid", "BHA to unclog pores and reduce breakouts",
                    min_experience=_X.INTERMEDIATE),
        ConcernRule("niacinamide", "Regulates oil production and reduces inflammation", offset=-5),
        ConcernRule("benzoyl_peroxide", "Targets acne-causing bacteria in stubborn breakouts",
                    offset=-10, min_experience=_X.ADVANCED),
    ),
    "cystic_acne": (
        ConcernRule("niacinamide", "Calms inflamed breakouts without over-drying"),
        ConcernRule("azelaic_acid", "Anti-inflammatory support alongside professional care", offset=-5),
    ),
    "aging": (
        ConcernRule("retinol", "Gold standard for anti-aging and skin renewal",
                    min_experience=_X.INTERMEDIATE, min_age=26),
        ConcernRule("vitamin_c", "Antioxidant protection and collagen support", offset=-5),
        ConcernRule("peptides", "Supports firmness with minimal irritation",
                    offset=-10, category=_R.SUPPORTING),
    ),
    "hyperpigmentation": (
        ConcernRule("vitamin_c", "Brightens skin and fades dark spots"),
        ConcernRule("azelaic_acid", "Gentle yet effective for hyperpigmentation",
                    offset=-5, max_sensitivity=6),
    ),
    "dryness": (
        ConcernRule("hyaluronic_acid", "Intense hydration and moisture retention"),
        ConcernRule("ceramide_cream", "Repairs and strengthens skin barrier",
                    offset=-10, category=_R.SUPPORTING),
    ),
    "sensitivity": (
        ConcernRule("niacinamide", "Calms inflammation and reduces redness"),
        ConcernRule("azelaic_acid", "Specifically effective for rosacea and sensitive skin",
                    offset=5, requires_condition="rosacea"),
        ConcernRule("centella_asiatica", "Soothes redness and supports barrier repair",
                    offset=-5, category=_R.SUPPORTING),
    ),
    "oiliness": (
        ConcernRule("niacinamide", "Controls sebum production and minimizes shine"),
        ConcernRule("salicylic_acid", "Deep cleanses pores and controls oil",
                    offset=-5, min_experience=_X.INTERMEDIATE),
    ),
    "pores": (
        ConcernRule("niacinamide", "Minimizes pore appearance and refines texture"),
        ConcernRule("salicylic_acid", "Clears pores and improves texture",
                    offset=-5, min_experience=_X.INTERMEDIATE),
    ),
    "texture": (
        ConcernRule("glycolic_acid", "AHA exfoliation for smoother, more even skin",
                    min_experience=_X.INTERMEDIATE),
        ConcernRule("niacinamide", "Refines skin texture over time", offset=-5),
    ),
    "sun_damage": (
        ConcernRule("vitamin_c", "Antioxidant repair for sun-exposed skin", offset=-5),
    ),
}


# ── Per-dimension candidates ─────────────────────────────────────────────────
# Non-essential categories only: each essential category comes from
# ESSENTIAL_RULES exactly once.

SKIN_TYPE_PRIORITY = 75
AGE_PRIORITY = 70
CLIMATE_PRIORITY = 65

SKIN_TYPE_CANDIDATES: dict[SkinType, tuple[str, ...]] = {
    SkinType.OILY: ("niacinamide", "salicylic_acid"),
    SkinType.DRY: ("hyaluronic_acid", "ceramide_cream"),
    SkinType.COMBINATION: ("niacinamide", "salicylic_acid"),
    SkinType.SENSITIVE: ("niacinamide", "azelaic_acid", "centella_asiatica"),
    SkinType.NORMAL: ("vitamin_c", "retinol"),
}

AGE_CANDIDATES: dict[AgeBracket, tuple[str, ...]] = {
    AgeBracket.TEENS: (),
    AgeBracket.TWENTIES: ("vitamin_c", "niacinamide", "retinol"),
    AgeBracket.THIRTIES: ("retinol", "vitamin_c", "hyaluronic_acid"),
    AgeBracket.FORTIES: ("retinol", "vitamin_c", "peptides"),
    AgeBracket.FIFTIES_PLUS: ("retinol", "peptides", "ceramide_cream"),
}

CLIMATE_CANDIDATES: dict[Climate, tuple[str, ...]] = {
    Climate.HOT_HUMID: ("niacinamide",),
    Climate.HOT_DRY: ("hyaluronic_acid",),
    Climate.COLD: ("ceramide_cream",),
    Climate.MODERATE: (),
    Climate.VARIED: ("hyaluronic_acid",),
}


# ── Medical conditions ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class MedicalRule:
    """Hard rule for a condition.

    ``avoid`` tags match an entry id, its category or any of its active
    ingredient tags. ``required`` entries are forced in at priority 100.
    An avoided entry listed in ``safe_alternatives`` is swapped for the
    safer entry instead of simply disappearing.
    """

    required: tuple[str, ...] = ()
    avoid: tuple[str, ...] = ()
    safe_alternatives: dict[str, str] = field(default_factory=dict)


MEDICAL_RULES: dict[str, MedicalRule] = {
    "eczema": MedicalRule(
        required=("gentle_cleanser", "ceramide_cream", "mineral_sunscreen"),
        avoid=("active", "salicylic_acid", "retinoid", "aha"),
    ),
    "rosacea": MedicalRule(
        required=("gentle_cleanser", "azelaic_acid", "mineral_sunscreen"),
        avoid=("retinoid",),
    ),
    "cystic_acne": MedicalRule(
        required=("gentle_cleanser", "niacinamide"),
        avoid=("aha",),
    ),
    "psoriasis": MedicalRule(
        required=("gentle_cleanser", "rich_moisturizer"),
        avoid=("salicylic_acid", "retinoid"),
    ),
    "melasma": MedicalRule(
        required=("mineral_sunscreen", "vitamin_c"),
        avoid=("retinoid",),
    ),
    "pregnancy": MedicalRule(
        required=("mineral_sunscreen",),
        avoid=("retinoid", "salicylic_acid", "benzoyl_peroxide"),
        safe_alternatives={
            "retinol": "bakuchiol",
            "salicylic_acid": "azelaic_acid",
            "benzoyl_peroxide": "azelaic_acid",
        },
    ),
    "nursing": MedicalRule(
        avoid=("retinoid",),
        safe_alternatives={"retinol": "bakuchiol"},
    ),
}

# Safe same-category substitute when an avoid rule empties an essential category
SAFE_ESSENTIALS: dict[EntryCategory, str] = {
    EntryCategory.CLEANSER: "gentle_cleanser",
    EntryCategory.MOISTURIZER: "rich_moisturizer",
    EntryCategory.SUNSCREEN: "mineral_sunscreen",
}
