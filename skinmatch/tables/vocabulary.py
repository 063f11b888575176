"""
Canonical tag vocabulary and the aliases accepted on input.

Assessment forms have used several spellings for the same concern
(``acne_breakouts`` vs ``acne``, ``sun-damage`` vs ``sun_protection``).
Everything downstream of the normalizer sees only the canonical tags.
"""

from skinmatch.schemas import AgeBracket, BudgetTier, Climate, ExperienceLevel, Gender, SkinType

CONCERN_ALIASES: dict[str, str] = {
    "acne_breakouts": "acne",
    "breakouts": "acne",
    "pimples": "acne",
    "severe_cystic_acne": "cystic_acne",
    "cystic": "cystic_acne",
    "fine_lines_wrinkles": "aging",
    "fine_lines": "aging",
    "wrinkles": "aging",
    "anti_aging": "aging",
    "dark_spots_hyperpigmentation": "hyperpigmentation",
    "dark_spots": "hyperpigmentation",
    "pigmentation": "hyperpigmentation",
    "dryness_dehydration": "dryness",
    "dehydration": "dryness",
    "excess_oil_shine": "oiliness",
    "oil": "oiliness",
    "shine": "oiliness",
    "large_pores": "pores",
    "uneven_texture": "texture",
    "sensitivity_redness": "sensitivity",
    "redness": "sensitivity",
    "sun_protection": "sun_damage",
}

CONDITION_ALIASES: dict[str, str] = {
    "severe_cystic_acne": "cystic_acne",
    "pregnant": "pregnancy",
    "breastfeeding": "nursing",
    "atopic_dermatitis": "eczema",
}

GOAL_ALIASES: dict[str, str] = {
    "clear_skin": "clear_acne",
    "reduce_acne": "clear_acne",
    "brighten": "brighten_skin",
    "hydrate": "hydrate_skin",
    "hydration": "hydrate_skin",
    "sun_damage": "sun_protection",
}

SKIN_TYPE_ALIASES: dict[str, SkinType] = {
    "combo": SkinType.COMBINATION,
    "mixed": SkinType.COMBINATION,
}

BUDGET_ALIASES: dict[str, BudgetTier] = {
    "budget_friendly": BudgetTier.BUDGET,
    "affordable": BudgetTier.BUDGET,
    "low": BudgetTier.BUDGET,
    "mid": BudgetTier.MID_RANGE,
    "medium": BudgetTier.MID_RANGE,
    "high_end": BudgetTier.PREMIUM,
    "high": BudgetTier.PREMIUM,
}

EXPERIENCE_ALIASES: dict[str, ExperienceLevel] = {
    "none": ExperienceLevel.BEGINNER,
    "novice": ExperienceLevel.BEGINNER,
    "new": ExperienceLevel.BEGINNER,
    "some": ExperienceLevel.INTERMEDIATE,
    "experienced": ExperienceLevel.ADVANCED,
    "professional": ExperienceLevel.EXPERT,
}

AGE_ALIASES: dict[str, AgeBracket] = {
    "teen": AgeBracket.TEENS,
    "under_20": AgeBracket.TEENS,
    "13_19": AgeBracket.TEENS,
    "20s": AgeBracket.TWENTIES,
    "20_29": AgeBracket.TWENTIES,
    "30s": AgeBracket.THIRTIES,
    "30_39": AgeBracket.THIRTIES,
    "40s": AgeBracket.FORTIES,
    "40_49": AgeBracket.FORTIES,
    "forties_plus": AgeBracket.FORTIES,
    "50s": AgeBracket.FIFTIES_PLUS,
    "50+": AgeBracket.FIFTIES_PLUS,
    "50_plus": AgeBracket.FIFTIES_PLUS,
    "fifties": AgeBracket.FIFTIES_PLUS,
}

CLIMATE_ALIASES: dict[str, Climate] = {
    "humid": Climate.HOT_HUMID,
    "tropical": Climate.HOT_HUMID,
    "arid": Climate.HOT_DRY,
    "desert": Climate.HOT_DRY,
    "temperate": Climate.MODERATE,
    "mild": Climate.MODERATE,
    "cold_dry": Climate.COLD,
    "varied_seasonal": Climate.VARIED,
    "seasonal": Climate.VARIED,
}

GENDER_ALIASES: dict[str, Gender] = {
    "woman": Gender.FEMALE,
    "f": Gender.FEMALE,
    "man": Gender.MALE,
    "m": Gender.MALE,
    "nonbinary": Gender.NON_BINARY,
}
