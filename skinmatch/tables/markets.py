"""
Market configuration: currency, budget bands, local catalog, retail products.

A market with products resolves entries to concrete items at exact prices;
a market without them (US) works at the ingredient level and prices each
entry by its catalog range.
"""

from skinmatch.schemas import BudgetTier, Climate, Market, Product, SkinType
from skinmatch.tables.catalog import CATALOG

_B = BudgetTier
_T = SkinType


# ── India: retail products in INR ────────────────────────────────────────────

# Entry id -> products, most preferred first. The resolver picks the first
# one whose price fits the user's budget ceiling.
_IN_PRODUCTS: dict[str, tuple[Product, ...]] = {
    "gentle_cleanser": (
        Product(
            id="paula_choice_cleanser", name="Paula's Choice CALM Cleanser",
            brand="Paula's Choice", price=1299, size="198ml",
            benefits=("Calms irritation", "Fragrance-free", "Plant-based ingredients"),
        ),
        Product(
            id="cerave_foaming_cleanser", name="CeraVe Foaming Facial Cleanser",
            brand="CeraVe", price=990, size="236ml",
            benefits=("Ceramides restore barrier", "Hyaluronic acid hydrates", "Non-comedogenic"),
        ),
        Product(
            id="cetaphil_gentle_cleanser", name="Cetaphil Gentle Skin Cleanser",
            brand="Cetaphil", price=299, size="125ml",
            benefits=("Maintains skin barrier", "Non-comedogenic", "Fragrance-free"),
        ),
        Product(
            id="simple_refreshing_cleanser", name="Simple Refreshing Facial Wash",
            brand="Simple", price=199, size="150ml",
            benefits=("No artificial perfumes", "Vitamin B5", "Triple purified water"),
        ),
    ),
    "salicylic_acid_cleanser": (
        Product(
            id="neutrogena_oil_free_cleanser", name="Neutrogena Oil-Free Acne Wash",
            brand="Neutrogena", price=399, size="175ml",
            benefits=("Oil-free formula", "Unclogs pores", "Prevents new breakouts"),
        ),
    ),
    "niacinamide": (
        Product(
            id="minimalist_niacinamide", name="Minimalist Niacinamide 10%",
            brand="Minimalist", price=349, size="30ml",
            benefits=("Controls oil production", "Minimizes pore appearance", "Reduces inflammation"),
        ),
    ),
    "hyaluronic_acid": (
        Product(
            id="the_ordinary_hyaluronic_acid", name="The Ordinary Hyaluronic Acid 2% + B5",
            brand="The Ordinary", price=490, size="30ml",
            benefits=("Intense hydration", "Plumps fine lines", "Suitable for all skin types"),
        ),
    ),
    "salicylic_acid": (
        Product(
            id="paula_choice_bha", name="Paula's Choice 2% BHA Liquid",
            brand="Paula's Choice", price=1299, size="30ml",
            benefits=("Unclogs pores", "Reduces blackheads", "Smooths texture"),
        ),
    ),
    "vitamin_c": (
        Product(
            id="drunk_elephant_vitamin_c", name="Drunk Elephant C-Firma Day Serum",
            brand="Drunk Elephant", price=2499, size="30ml",
            benefits=("15% L-Ascorbic Acid", "Firms skin", "Brightens complexion"),
        ),
        Product(
            id="cosrx_vitamin_c", name="COSRX Vitamin C 23% Suspension",
            brand="COSRX", price=899, size="20ml",
            benefits=("Brightens skin tone", "Fades dark spots", "Antioxidant protection"),
        ),
    ),
    "retinol": (
        Product(
            id="skinceuticals_retinol", name="SkinCeuticals Retinol 0.5",
            brand="SkinCeuticals", price=2800, size="30ml",
            benefits=("Stimulates collagen", "Reduces fine lines", "Improves texture"),
        ),
    ),
    "lightweight_moisturizer": (
        Product(
            id="neutrogena_hydra_boost", name="Neutrogena Hydra Boost Water Gel",
            brand="Neutrogena", price=699, size="50g",
            benefits=("Oil-free hydration", "Cooling gel texture", "Non-comedogenic"),
        ),
        Product(
            id="ponds_super_light_gel", name="Pond's Super Light Gel",
            brand="Pond's", price=199, size="50g",
            benefits=("Non-greasy formula", "Quick absorption", "Hyaluronic acid"),
        ),
    ),
    "rich_moisturizer": (
        Product(
            id="cerave_daily_moisturizer", name="CeraVe Daily Moisturizing Lotion",
            brand="CeraVe", price=799, size="88ml",
            benefits=("Restores skin barrier", "24-hour hydration", "MVE technology"),
        ),
        Product(
            id="nivea_soft_cream", name="Nivea Soft Light Moisturizer",
            brand="Nivea", price=149, size="50ml",
            benefits=("24-hour hydration", "Vitamin E", "Jojoba oil"),
        ),
    ),
    "mineral_sunscreen": (
        Product(
            id="eltamd_sunscreen", name="EltaMD UV Clear Broad-Spectrum SPF 46",
            brand="EltaMD", price=1299, size="48g",
            benefits=("Zinc oxide protection", "Niacinamide calms", "Fragrance-free"),
        ),
        Product(
            id="la_roche_posay_sunscreen", name="La Roche-Posay Anthelios Sunscreen SPF 50",
            brand="La Roche-Posay", price=899, size="50ml",
            benefits=("Photostable filters", "Water resistant", "Antioxidants"),
        ),
        Product(
            id="neutrogena_ultra_sheer", name="Neutrogena Ultra Sheer Sunscreen SPF 50+",
            brand="Neutrogena", price=449, size="30ml",
            benefits=("Dry-touch technology", "Lightweight", "Non-comedogenic"),
        ),
    ),
    "chemical_sunscreen": (
        Product(
            id="lakme_sunscreen", name="Lakme Sun Expert SPF 30 PA++",
            brand="Lakme", price=299, size="50ml",
            benefits=("Broad spectrum protection", "Non-greasy", "Water resistant"),
        ),
    ),
}

INDIA = Market(
    code="IN",
    name="India",
    currency="INR",
    # Spending ceilings: cheaper items always qualify for a higher tier
    budget_bands={
        _B.BUDGET: (0, 500),
        _B.MID_RANGE: (0, 1500),
        _B.PREMIUM: (0, 3000),
        _B.LUXURY: (0, 10000),
    },
    catalog=CATALOG,
    products=_IN_PRODUCTS,
    fallback={
        _T.OILY: ("salicylic_acid_cleanser", "niacinamide", "lightweight_moisturizer", "chemical_sunscreen"),
        _T.DRY: ("gentle_cleanser", "hyaluronic_acid", "rich_moisturizer", "mineral_sunscreen"),
        _T.SENSITIVE: ("gentle_cleanser", "rich_moisturizer", "mineral_sunscreen"),
        _T.COMBINATION: ("gentle_cleanser", "niacinamide", "lightweight_moisturizer", "mineral_sunscreen"),
        _T.NORMAL: ("gentle_cleanser", "niacinamide", "lightweight_moisturizer", "mineral_sunscreen"),
    },
)


# ── United States: ingredient level in USD ───────────────────────────────────

UNITED_STATES = Market(
    code="US",
    name="United States",
    currency="USD",
    budget_bands={
        _B.BUDGET: (0, 15),
        _B.MID_RANGE: (0, 40),
        _B.PREMIUM: (0, 80),
        _B.LUXURY: (0, 250),
    },
    catalog=CATALOG,
    fallback={
        _T.OILY: ("salicylic_acid_cleanser", "niacinamide", "lightweight_moisturizer", "mineral_sunscreen"),
        _T.DRY: ("gentle_cleanser", "hyaluronic_acid", "rich_moisturizer", "mineral_sunscreen"),
        _T.SENSITIVE: ("gentle_cleanser", "rich_moisturizer", "mineral_sunscreen"),
        _T.COMBINATION: ("gentle_cleanser", "niacinamide", "lightweight_moisturizer", "mineral_sunscreen"),
        _T.NORMAL: ("gentle_cleanser", "vitamin_c", "lightweight_moisturizer", "mineral_sunscreen"),
    },
)


MARKETS: dict[str, Market] = {m.code: m for m in (INDIA, UNITED_STATES)}

MARKET_ALIASES = {
    "in": "IN",
    "ind": "IN",
    "india": "IN",
    "us": "US",
    "usa": "US",
    "united_states": "US",
    "america": "US",
}


# ── City → climate ───────────────────────────────────────────────────────────

CITY_CLIMATES: dict[str, Climate] = {
    **{city: Climate.HOT_HUMID for city in (
        "mumbai", "chennai", "kolkata", "hyderabad", "hyd", "kochi", "goa",
        "miami", "houston", "new_orleans",
    )},
    **{city: Climate.HOT_DRY for city in (
        "delhi", "new_delhi", "jaipur", "ahmedabad", "indore", "phoenix", "las_vegas",
    )},
    **{city: Climate.MODERATE for city in (
        "bangalore", "bengaluru", "pune", "dehradun", "mysore", "san_francisco", "los_angeles",
    )},
    **{city: Climate.COLD for city in (
        "shimla", "manali", "srinagar", "darjeeling", "chicago", "minneapolis", "anchorage",
    )},
}


def get_market(code: str) -> Market:
    """Market by code; raises KeyError for unknown codes."""
    return MARKETS[code]
