"""
User-facing guidance text: usage instructions, warnings, timelines, follow-up.
"""

from skinmatch.schemas import EntryCategory, ExperienceLevel, Severity

_C = EntryCategory


# ── Routine ──────────────────────────────────────────────────────────────────

ROUTINE_ORDER: tuple[EntryCategory, ...] = (
    _C.CLEANSER,
    _C.ACTIVE,
    _C.HYDRATING,
    _C.TREATMENT,
    _C.MOISTURIZER,
    _C.SUNSCREEN,
)

CATEGORY_INSTRUCTIONS: dict[EntryCategory, str] = {
    _C.CLEANSER: "Massage onto damp skin for 30 seconds, rinse with lukewarm water",
    _C.ACTIVE: "Apply a thin layer to clean, dry skin",
    _C.HYDRATING: "Apply to slightly damp skin and press gently to absorb",
    _C.TREATMENT: "Apply after serums, before moisturizer",
    _C.MOISTURIZER: "Apply evenly to face and neck",
    _C.SUNSCREEN: "Apply 15 minutes before sun exposure",
}

WAIT_TIMES: dict[EntryCategory, str] = {
    _C.CLEANSER: "None",
    _C.ACTIVE: "5-10 minutes",
    _C.HYDRATING: "2-3 minutes",
    _C.TREATMENT: "2-3 minutes",
    _C.MOISTURIZER: "2-3 minutes",
    _C.SUNSCREEN: "None (final step)",
}

APPLICATION_AMOUNTS: dict[EntryCategory, str] = {
    _C.CLEANSER: "1-2 pumps or pea-sized amount",
    _C.ACTIVE: "2-3 drops or thin layer",
    _C.HYDRATING: "3-4 drops",
    _C.TREATMENT: "Pea-sized amount",
    _C.MOISTURIZER: "Nickel-sized amount",
    _C.SUNSCREEN: "1/4 teaspoon for face and neck",
}

BEGINNER_ACTIVE_NOTE = "Start with once per week and gradually increase frequency as tolerated."
PATCH_TEST_NOTE = "Patch test first and start with a minimal amount."
RETINOL_BEGINNER_INSTRUCTIONS = "Start 1-2 times per week in the evening"
RETINOL_INSTRUCTIONS = "Use every other evening"

AFTERNOON_INSTRUCTIONS = "Reapply over makeup or moisturizer every 2 hours outdoors"
AFTERNOON_TIMING = "Midday, or after sweating or swimming"

ROUTINE_TIPS = (
    "Apply products to slightly damp skin for better absorption",
    "Allow each product to absorb before applying the next",
    "Introduce new products one at a time to monitor reactions",
    "Never skip sunscreen, even on cloudy days",
)
BEGINNER_TIPS = (
    "Start slowly with active ingredients, your skin needs time to adjust",
    "Keep a skincare diary to track what works for you",
)
HUMID_TIPS = ("In humid weather, use lighter formulations and wait longer between steps",)
SENSITIVE_TIPS = (
    "Always patch test new products on your inner arm first",
    "Use lukewarm water instead of hot when cleansing",
)


# ── Warnings ─────────────────────────────────────────────────────────────────

GENERAL_WARNING = (
    "Always patch test new actives and use sunscreen daily while using them",
    Severity.HIGH,
)
BEGINNER_WARNING = (
    "Start with one new product at a time and wait 1-2 weeks before adding the next",
    Severity.MEDIUM,
)
HUMID_CLIMATE_WARNING = (
    "In humid weather, allow extra time between product applications to prevent pilling",
    Severity.MEDIUM,
)

# Keyed by entry id, then by active ingredient tag
INGREDIENT_WARNINGS: dict[str, tuple[str, Severity]] = {
    "retinoid": (
        "Retinol can cause initial irritation. Start slowly and always use sunscreen.",
        Severity.HIGH,
    ),
    "salicylic_acid": (
        "Salicylic acid can increase sun sensitivity. Use sunscreen daily.",
        Severity.MEDIUM,
    ),
    "vitamin_c": (
        "Vitamin C can cause irritation if the concentration is too high. Start with lower concentrations.",
        Severity.MEDIUM,
    ),
    "benzoyl_peroxide": (
        "Benzoyl peroxide can bleach fabrics and dry the skin. Use sparingly on breakouts only.",
        Severity.MEDIUM,
    ),
    "aha": (
        "AHAs increase sun sensitivity for up to a week after use. Never skip sunscreen.",
        Severity.HIGH,
    ),
}

CONDITION_WARNINGS: dict[str, tuple[str, Severity]] = {
    "cystic_acne": (
        "Cystic acne usually needs prescription treatment. Please consult a dermatologist.",
        Severity.HIGH,
    ),
    "rosacea": (
        "Avoid hot water, alcohol-based toners and fragrance, which commonly trigger rosacea flares.",
        Severity.HIGH,
    ),
    "eczema": (
        "Keep the routine minimal and fragrance-free. Stop any product that stings on eczema patches.",
        Severity.HIGH,
    ),
    "psoriasis": (
        "Follow your dermatologist's treatment plan. These products support, not replace, it.",
        Severity.MEDIUM,
    ),
    "melasma": (
        "Melasma worsens with heat and visible light. Reapply sunscreen and wear a hat outdoors.",
        Severity.HIGH,
    ),
    "pregnancy": (
        "Retinoids and high-strength acids are excluded during pregnancy. Check new products with your doctor.",
        Severity.HIGH,
    ),
    "nursing": (
        "Retinoids are excluded while nursing. Check new products with your doctor.",
        Severity.HIGH,
    ),
}


# ── Timeline & follow-up ─────────────────────────────────────────────────────

TIMELINES: dict[str, dict[str, str]] = {
    "beginner": {
        "week_1_2": "Start with cleanser, moisturizer, and sunscreen only",
        "week_3_4": "Add gentle ingredients like niacinamide or hyaluronic acid",
        "month_2_3": "Introduce actives gradually if previous products are well-tolerated",
        "month_4_plus": "Add additional treatments based on skin response",
    },
    "intermediate": {
        "week_1_2": "Establish basic routine with cleanser, moisturizer, sunscreen",
        "week_3_4": "Add primary active ingredient",
        "month_2": "Add supporting ingredients",
        "month_3_plus": "Add secondary actives if needed",
    },
    "advanced": {
        "week_1_2": "Establish full routine gradually",
        "week_3_4": "All products should be introduced",
        "month_2_plus": "Evaluate effectiveness and adjust as needed",
    },
}


def timeline_tier(level: ExperienceLevel) -> str:
    if level is ExperienceLevel.BEGINNER:
        return "beginner"
    if level is ExperienceLevel.INTERMEDIATE:
        return "intermediate"
    return "advanced"


SIGNS_TO_WATCH = (
    "Persistent irritation or redness",
    "No improvement after 8-12 weeks",
    "New skin concerns developing",
)
NEXT_STEPS = (
    "Consider adding complementary ingredients",
    "Evaluate product effectiveness",
    "Adjust routine based on seasonal changes",
)


# ── Fallback ─────────────────────────────────────────────────────────────────

FALLBACK_WARNING = (
    "These are basic recommendations. Consider retaking the assessment for personalized suggestions."
)
FALLBACK_TIMELINE = {
    "week_1_2": "Start with basic routine",
    "week_3_4": "Continue if products are well-tolerated",
    "month_2_plus": "Retake assessment for more personalized recommendations",
}
