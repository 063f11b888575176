"""
Pydantic schemas — the single source of truth for all data contracts.

Assessment is what callers hand in (after normalization), UserProfile is the
derived view every pipeline stage reads, and RecommendationResult is the
JSON-ready object handed back. Reference records (CatalogEntry, Product,
Market) are frozen; stages build new Recommendation copies instead of
mutating them.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Enums ────────────────────────────────────────────────────────────────────


class SkinType(str, enum.Enum):
    DRY = "dry"
    OILY = "oily"
    COMBINATION = "combination"
    NORMAL = "normal"
    SENSITIVE = "sensitive"


class BudgetTier(str, enum.Enum):
    BUDGET = "budget"
    MID_RANGE = "mid_range"
    PREMIUM = "premium"
    LUXURY = "luxury"


class ExperienceLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @property
    def rank(self) -> int:
        """1 for beginner up to 4 for expert."""
        return list(ExperienceLevel).index(self) + 1


class AgeBracket(str, enum.Enum):
    TEENS = "teens"
    TWENTIES = "twenties"
    THIRTIES = "thirties"
    FORTIES = "forties"
    FIFTIES_PLUS = "fifties_plus"


class Climate(str, enum.Enum):
    HOT_HUMID = "hot_humid"
    HOT_DRY = "hot_dry"
    MODERATE = "moderate"
    COLD = "cold"
    VARIED = "varied"


class Gender(str, enum.Enum):
    FEMALE = "female"
    MALE = "male"
    NON_BINARY = "non_binary"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class EntryCategory(str, enum.Enum):
    CLEANSER = "cleanser"
    ACTIVE = "active"
    HYDRATING = "hydrating"
    MOISTURIZER = "moisturizer"
    SUNSCREEN = "sunscreen"
    TREATMENT = "treatment"


# Categories every routine must contain
ESSENTIAL_CATEGORIES = (
    EntryCategory.CLEANSER,
    EntryCategory.MOISTURIZER,
    EntryCategory.SUNSCREEN,
)


class Strength(str, enum.Enum):
    GENTLE = "gentle"
    MODERATE = "moderate"
    STRONG = "strong"
    VERY_STRONG = "very_strong"


class RecommendationCategory(str, enum.Enum):
    """Which generator (or rule) proposed a recommendation."""

    ESSENTIAL = "essential"
    TARGETED = "targeted"
    SUPPORTING = "supporting"
    SKIN_TYPE = "skin_type"
    AGE_BASED = "age_based"
    CLIMATE = "climate"


class Severity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ── Input & profile ──────────────────────────────────────────────────────────


class Assessment(BaseModel):
    """A normalized self-assessment. Every field is present and in range."""

    model_config = ConfigDict(frozen=True)

    skin_type: SkinType = SkinType.NORMAL
    concerns: list[str] = Field(default_factory=list)
    medical_conditions: list[str] = Field(default_factory=list)
    age_bracket: AgeBracket = AgeBracket.TWENTIES
    gender: Gender = Gender.PREFER_NOT_TO_SAY
    sensitivity: int = Field(default=5, ge=1, le=10)
    climate: Climate = Climate.MODERATE
    budget_tier: BudgetTier = BudgetTier.MID_RANGE
    experience_level: ExperienceLevel = ExperienceLevel.BEGINNER
    goals: list[str] = Field(default_factory=list)
    lifestyle: str = "mixed"
    free_text_concerns: str = ""
    location: str = ""
    market: str = "IN"


class UserProfile(Assessment):
    """Assessment plus the attributes derived from it by the profile builder."""

    prioritized_concerns: list[str] = Field(default_factory=list)
    risk_tolerance: int = 3
    routine_complexity: int = 1
    primary_concern: str = "maintenance"
    age: int = 25
    has_hormonal_issues: bool = False


# ── Reference data ───────────────────────────────────────────────────────────


class CatalogEntry(BaseModel):
    """An ingredient-level item the engine can recommend."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    category: EntryCategory
    suitable_for: tuple[str, ...] = ("all",)
    addresses: tuple[str, ...] = ()
    strength: Strength = Strength.GENTLE
    # market code -> (min, max) price in that market's currency
    prices: dict[str, tuple[float, float]] = Field(default_factory=dict)
    active_ingredients: tuple[str, ...] = ()
    requires_experience: ExperienceLevel = ExperienceLevel.BEGINNER
    essential: bool = False
    morning_use: bool = False
    instructions: str = ""

    @property
    def conflict_tags(self) -> set[str]:
        """Tags checked against the conflict matrix. Empty when the entry has no actives."""
        if not self.active_ingredients:
            return set()
        return set(self.active_ingredients) | {self.category.value}

    def price_range(self, market_code: str) -> Optional[tuple[float, float]]:
        return self.prices.get(market_code)


class Product(BaseModel):
    """A concrete retail product standing in for a catalog entry in one market."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    brand: str
    price: float
    size: str = ""
    benefits: tuple[str, ...] = ()


class Market(BaseModel):
    """Everything that varies by country: currency, price bands, catalog, products."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    currency: str
    budget_bands: dict[BudgetTier, tuple[float, float]]
    catalog: dict[str, CatalogEntry]
    products: dict[str, tuple[Product, ...]] = Field(default_factory=dict)
    fallback: dict[SkinType, tuple[str, ...]] = Field(default_factory=dict)

    def band(self, tier: BudgetTier) -> tuple[float, float]:
        return self.budget_bands[tier]


# ── Pipeline records ─────────────────────────────────────────────────────────


class Recommendation(BaseModel):
    """Working record that flows through every stage after candidate generation."""

    model_config = ConfigDict(frozen=True)

    entry_id: str
    reasoning: str
    category: RecommendationCategory
    priority: float
    match_score: Optional[int] = None
    final_priority: Optional[float] = None
    budget_adjusted: bool = False
    medically_required: bool = False
    display_name: str = ""
    product: Optional[Product] = None
    price: Optional[float] = None


class RoutineStep(BaseModel):
    """A single step in a morning/afternoon/evening routine."""

    step: int
    entry_id: str
    display_name: str
    instructions: str
    timing: str = ""
    amount: str = ""


class WarningNotice(BaseModel):
    """Advisory text for the end user; never a control-flow signal."""

    type: str
    message: str
    severity: Severity = Severity.MEDIUM


class StructuredRecommendations(BaseModel):
    essential: list[Recommendation] = Field(default_factory=list)
    targeted: list[Recommendation] = Field(default_factory=list)
    supporting: list[Recommendation] = Field(default_factory=list)
    optional: list[Recommendation] = Field(default_factory=list)

    def flatten(self) -> list[Recommendation]:
        """Every recommendation, bucket order preserved."""
        return [*self.essential, *self.targeted, *self.supporting, *self.optional]


class RoutineSuggestions(BaseModel):
    morning: list[RoutineStep] = Field(default_factory=list)
    afternoon: list[RoutineStep] = Field(default_factory=list)
    evening: list[RoutineStep] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)


class FollowUp(BaseModel):
    reassessment_period: str
    signs_to_watch: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)


class BudgetSummary(BaseModel):
    currency: str
    total: float = 0
    by_bucket: dict[str, float] = Field(default_factory=dict)
    average: float = 0
    value_assessment: str = ""


# ── Result ───────────────────────────────────────────────────────────────────


class RecommendationResult(BaseModel):
    """Final output of one pipeline run, or of the fallback path."""

    user_profile: dict
    generated_at: str
    market: str
    currency: str
    recommendations: StructuredRecommendations
    routine_suggestions: RoutineSuggestions
    warnings: list[WarningNotice] = Field(default_factory=list)
    timeline: dict[str, str] = Field(default_factory=dict)
    follow_up: Optional[FollowUp] = None
    budget_summary: Optional[BudgetSummary] = None
    error: Optional[str] = None
    fallback: bool = False

    def to_payload(self) -> dict:
        """JSON-compatible dict for the rendering/persistence layer."""
        payload = self.model_dump(mode="json")
        if not self.routine_suggestions.afternoon:
            payload["routine_suggestions"].pop("afternoon")
        if not self.fallback:
            payload.pop("error")
            payload.pop("fallback")
        return payload
