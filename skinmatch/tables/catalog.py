"""
Ingredient catalog — every item the engine can recommend, priced per market.

Prices are (min, max) ranges in the market's own currency. Essential
entries are priced so that their cheapest option always fits the lowest
budget tier of every market.
"""

from skinmatch.schemas import CatalogEntry, EntryCategory, ExperienceLevel, Strength

_C = EntryCategory
_S = Strength
_X = ExperienceLevel


CATALOG: dict[str, CatalogEntry] = {
    entry.id: entry
    for entry in (
        # ── Cleansers ────────────────────────────────────────────────────────
        CatalogEntry(
            id="gentle_cleanser",
            display_name="Gentle Daily Cleanser",
            category=_C.CLEANSER,
            suitable_for=("sensitive", "dry", "normal"),
            addresses=("sensitivity",),
            strength=_S.GENTLE,
            prices={"IN": (199, 1299), "US": (8, 16)},
            essential=True,
            instructions="Use twice daily, morning and evening",
        ),
        CatalogEntry(
            id="salicylic_acid_cleanser",
            display_name="Salicylic Acid Cleanser",
            category=_C.CLEANSER,
            suitable_for=("oily", "combination"),
            addresses=("acne", "oiliness", "pores"),
            strength=_S.MODERATE,
            prices={"IN": (399, 2000), "US": (9, 25)},
            active_ingredients=("salicylic_acid",),
            essential=True,
            instructions="Use once daily in the evening, increase to twice daily if tolerated",
        ),
        # ── Actives ──────────────────────────────────────────────────────────
        CatalogEntry(
            id="retinol",
            display_name="Retinol Serum",
            category=_C.ACTIVE,
            suitable_for=("normal", "oily", "combination"),
            addresses=("aging", "acne", "texture"),
            strength=_S.STRONG,
            prices={"IN": (800, 3000), "US": (20, 90)},
            active_ingredients=("retinoid",),
            requires_experience=_X.INTERMEDIATE,
        ),
        CatalogEntry(
            id="niacinamide",
            display_name="Niacinamide Serum",
            category=_C.ACTIVE,
            suitable_for=("all",),
            addresses=("oiliness", "pores", "sensitivity", "acne"),
            strength=_S.GENTLE,
            prices={"IN": (349, 1500), "US": (6, 35)},
            active_ingredients=("niacinamide",),
            instructions="Use once or twice daily, morning or evening",
        ),
        CatalogEntry(
            id="vitamin_c",
            display_name="Vitamin C Serum",
            category=_C.ACTIVE,
            suitable_for=("normal", "dry", "oily"),
            addresses=("hyperpigmentation", "aging", "sun_damage"),
            strength=_S.MODERATE,
            prices={"IN": (600, 2500), "US": (15, 80)},
            active_ingredients=("vitamin_c",),
            requires_experience=_X.INTERMEDIATE,
            morning_use=True,
            instructions="Use once daily in the morning routine",
        ),
        CatalogEntry(
            id="salicylic_acid",
            display_name="Salicylic Acid Treatment",
            category=_C.ACTIVE,
            suitable_for=("oily", "combination"),
            addresses=("acne", "oiliness", "pores", "texture"),
            strength=_S.MODERATE,
            prices={"IN": (500, 2000), "US": (10, 35)},
            active_ingredients=("salicylic_acid",),
            requires_experience=_X.INTERMEDIATE,
            instructions="Use 2-3 times per week in the evening, increase gradually",
        ),
        CatalogEntry(
            id="benzoyl_peroxide",
            display_name="Benzoyl Peroxide Spot Treatment",
            category=_C.ACTIVE,
            suitable_for=("oily", "combination"),
            addresses=("acne",),
            strength=_S.STRONG,
            prices={"IN": (250, 900), "US": (6, 20)},
            active_ingredients=("benzoyl_peroxide",),
            requires_experience=_X.ADVANCED,
            instructions="Dab on active breakouts only, once daily in the evening",
        ),
        CatalogEntry(
            id="glycolic_acid",
            display_name="Glycolic Acid Toner",
            category=_C.ACTIVE,
            suitable_for=("normal", "oily", "combination"),
            addresses=("texture", "hyperpigmentation"),
            strength=_S.MODERATE,
            prices={"IN": (550, 1800), "US": (10, 30)},
            active_ingredients=("aha",),
            requires_experience=_X.INTERMEDIATE,
            instructions="Use 2 evenings per week on dry skin, never on the same night as retinol",
        ),
        CatalogEntry(
            id="azelaic_acid",
            display_name="Azelaic Acid Treatment",
            category=_C.ACTIVE,
            suitable_for=("sensitive", "combination"),
            addresses=("acne", "sensitivity", "hyperpigmentation"),
            strength=_S.GENTLE,
            prices={"IN": (800, 2500), "US": (12, 60)},
            active_ingredients=("azelaic_acid",),
            requires_experience=_X.INTERMEDIATE,
            instructions="Start 2-3 times per week in the evening, increase gradually",
        ),
        CatalogEntry(
            id="bakuchiol",
            display_name="Bakuchiol Serum",
            category=_C.ACTIVE,
            suitable_for=("all",),
            addresses=("aging", "texture"),
            strength=_S.GENTLE,
            prices={"IN": (700, 2200), "US": (15, 60)},
            active_ingredients=("bakuchiol",),
            instructions="Use morning or evening, pregnancy-safe retinol alternative",
        ),
        # ── Hydration & treatments ───────────────────────────────────────────
        CatalogEntry(
            id="hyaluronic_acid",
            display_name="Hyaluronic Acid Serum",
            category=_C.HYDRATING,
            suitable_for=("all",),
            addresses=("dryness", "aging"),
            strength=_S.GENTLE,
            prices={"IN": (400, 1800), "US": (7, 40)},
            instructions="Use twice daily on damp skin, follow with moisturizer",
        ),
        CatalogEntry(
            id="ceramide_cream",
            display_name="Ceramide Barrier Cream",
            category=_C.TREATMENT,
            suitable_for=("dry", "sensitive"),
            addresses=("dryness", "sensitivity"),
            strength=_S.GENTLE,
            prices={"IN": (600, 2800), "US": (14, 55)},
            instructions="Use twice daily, especially after cleansing",
        ),
        CatalogEntry(
            id="centella_asiatica",
            display_name="Centella Asiatica Soothing Serum",
            category=_C.TREATMENT,
            suitable_for=("all",),
            addresses=("sensitivity", "texture"),
            strength=_S.GENTLE,
            prices={"IN": (450, 1800), "US": (10, 45)},
            instructions="Pat onto irritated areas morning and evening",
        ),
        CatalogEntry(
            id="peptides",
            display_name="Peptide Serum",
            category=_C.TREATMENT,
            suitable_for=("all",),
            addresses=("aging",),
            strength=_S.GENTLE,
            prices={"IN": (900, 3000), "US": (18, 80)},
            instructions="Use twice daily before moisturizer",
        ),
        # ── Moisturizers ─────────────────────────────────────────────────────
        CatalogEntry(
            id="lightweight_moisturizer",
            display_name="Lightweight Moisturizer",
            category=_C.MOISTURIZER,
            suitable_for=("oily", "combination", "normal"),
            strength=_S.GENTLE,
            prices={"IN": (199, 1500), "US": (10, 40)},
            essential=True,
            instructions="Use twice daily as the last step before sunscreen",
        ),
        CatalogEntry(
            id="rich_moisturizer",
            display_name="Rich Moisturizer",
            category=_C.MOISTURIZER,
            suitable_for=("dry", "sensitive"),
            addresses=("dryness", "sensitivity"),
            strength=_S.GENTLE,
            prices={"IN": (149, 2500), "US": (12, 50)},
            essential=True,
            instructions="Use twice daily, can be the final evening step",
        ),
        # ── Sunscreens ───────────────────────────────────────────────────────
        CatalogEntry(
            id="mineral_sunscreen",
            display_name="Mineral Sunscreen SPF 30+",
            category=_C.SUNSCREEN,
            suitable_for=("sensitive", "all"),
            addresses=("sun_damage",),
            strength=_S.GENTLE,
            prices={"IN": (449, 2000), "US": (12, 45)},
            essential=True,
            instructions="Use every morning, reapply every 2 hours when outdoors",
        ),
        CatalogEntry(
            id="chemical_sunscreen",
            display_name="Chemical Sunscreen SPF 30+",
            category=_C.SUNSCREEN,
            suitable_for=("normal", "oily", "combination"),
            addresses=("sun_damage",),
            strength=_S.MODERATE,
            prices={"IN": (299, 1800), "US": (9, 35)},
            essential=True,
            instructions="Use every morning, reapply every 2 hours when outdoors",
        ),
    )
}


def display_name(entry_id: str) -> str:
    """Catalog display name, or a title-cased id for unknown entries."""
    entry = CATALOG.get(entry_id)
    if entry:
        return entry.display_name
    return entry_id.replace("_", " ").title()
