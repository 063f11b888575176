"""
InputNormalizer — turn whatever the assessment form sent into an Assessment.

Never raises. Missing or malformed fields get documented defaults, tags are
mapped onto the canonical vocabulary, and sensitivity is clamped to 1..10.
Normalizing an already-normalized Assessment returns an equal Assessment.
"""

from __future__ import annotations

import enum
import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel

from skinmatch.schemas import (
    AgeBracket,
    Assessment,
    BudgetTier,
    Climate,
    ExperienceLevel,
    Gender,
    SkinType,
)
from skinmatch.tables.markets import CITY_CLIMATES, MARKET_ALIASES, MARKETS
from skinmatch.tables.vocabulary import (
    AGE_ALIASES,
    BUDGET_ALIASES,
    CLIMATE_ALIASES,
    CONCERN_ALIASES,
    CONDITION_ALIASES,
    EXPERIENCE_ALIASES,
    GENDER_ALIASES,
    GOAL_ALIASES,
    SKIN_TYPE_ALIASES,
)

logger = logging.getLogger(__name__)

DEFAULT_SENSITIVITY = 5
LEADING_INTEGER = re.compile(r"\s*[+-]?\d+")
DEFAULT_LIFESTYLE = "mixed"

# Assessment field -> accepted input keys, first non-null wins
FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "skin_type": ("skin_type", "skinType"),
    "concerns": ("concerns",),
    "medical_conditions": ("medical_conditions", "medicalConditions"),
    "age_bracket": ("age_bracket", "ageBracket", "age"),
    "gender": ("gender",),
    "sensitivity": ("sensitivity",),
    "climate": ("climate",),
    "budget_tier": ("budget_tier", "budgetTier", "budget"),
    "experience_level": ("experience_level", "experienceLevel", "experience"),
    "goals": ("goals",),
    "lifestyle": ("lifestyle",),
    "free_text_concerns": (
        "free_text_concerns", "freeTextConcerns", "additional_concerns", "additionalConcerns",
    ),
    "location": ("location", "city"),
    "market": ("market", "country"),
}


# ── Helpers ─────────────────────────────────────────────────────────────────


def _tag(value: Any) -> str:
    """Lower-case, trimmed, with spaces and hyphens folded to underscores."""
    return re.sub(r"[\s\-]+", "_", str(value).strip().lower())


def _pick(raw: Mapping, field: str) -> Any:
    for key in FIELD_KEYS[field]:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _tag_list(value: Any, aliases: dict[str, str], kind: str) -> list[str]:
    """Wrap scalars, drop falsy items, canonicalize, de-duplicate in order."""
    if value is None:
        return []
    if isinstance(value, (set, frozenset)):
        items = sorted(value, key=str)
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        items = [value]

    tags: list[str] = []
    for item in items:
        if not item or isinstance(item, (Mapping, list, tuple)):
            continue
        tag = _tag(item)
        if not tag:
            continue
        canonical = aliases.get(tag, tag)
        if canonical != tag:
            logger.debug(f"Mapped {kind} alias '{tag}' -> '{canonical}'")
        if canonical not in tags:
            tags.append(canonical)
    return tags


def _choice(value: Any, enum_cls: type[enum.Enum], aliases: Mapping, default: enum.Enum):
    if isinstance(value, enum_cls):
        return value
    if value is None or isinstance(value, (bool, Mapping, list, tuple)):
        return default
    tag = _tag(value)
    try:
        return enum_cls(tag)
    except ValueError:
        return aliases.get(tag, default)


def _age_bracket(value: Any) -> AgeBracket:
    """Brackets by name or alias; plain numbers are read as years."""
    years: Optional[float] = None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        years = value
    elif isinstance(value, str) and value.strip().isdigit():
        years = int(value.strip())
    if years is None:
        return _choice(value, AgeBracket, AGE_ALIASES, AgeBracket.TWENTIES)
    if years < 20:
        return AgeBracket.TEENS
    if years < 30:
        return AgeBracket.TWENTIES
    if years < 40:
        return AgeBracket.THIRTIES
    if years < 50:
        return AgeBracket.FORTIES
    return AgeBracket.FIFTIES_PLUS


def _sensitivity(value: Any) -> int:
    """Leading-integer parse clamped to 1..10; missing, zero or garbage reads as 5."""
    level = 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if math.isfinite(value):
            level = int(value)
    elif isinstance(value, str):
        match = LEADING_INTEGER.match(value)
        if match:
            level = int(match.group())
    return max(1, min(10, level or DEFAULT_SENSITIVITY))


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _climate_for(location: str) -> Optional[Climate]:
    """Climate of the first known city named in a free-text location."""
    if not location:
        return None
    padded = "_" + "_".join(re.findall(r"[a-z]+", location.lower())) + "_"
    for city, climate in CITY_CLIMATES.items():
        if f"_{city}_" in padded:
            return climate
    return None


def _market(value: Any, default_market: str) -> str:
    if value is None or isinstance(value, (bool, Mapping, list, tuple)):
        return default_market
    code = MARKET_ALIASES.get(_tag(value))
    if code in MARKETS:
        return code
    logger.debug(f"Unknown market {value!r}, using {default_market}")
    return default_market


# ── Public API ──────────────────────────────────────────────────────────────


def normalize(raw: Any, default_market: str = "IN") -> Assessment:
    """Build a fully-defaulted Assessment from a raw mapping (or anything else)."""
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(mode="json")
    if not isinstance(raw, Mapping):
        logger.debug(f"Assessment of type {type(raw).__name__} treated as empty")
        raw = {}

    location = _text(_pick(raw, "location"))
    climate_value = _pick(raw, "climate")
    climate = _choice(climate_value, Climate, CLIMATE_ALIASES, None)
    if climate is None:
        climate = _climate_for(location) or Climate.MODERATE

    return Assessment(
        skin_type=_choice(_pick(raw, "skin_type"), SkinType, SKIN_TYPE_ALIASES, SkinType.NORMAL),
        concerns=_tag_list(_pick(raw, "concerns"), CONCERN_ALIASES, "concern"),
        medical_conditions=_tag_list(
            _pick(raw, "medical_conditions"), CONDITION_ALIASES, "condition"
        ),
        age_bracket=_age_bracket(_pick(raw, "age_bracket")),
        gender=_choice(_pick(raw, "gender"), Gender, GENDER_ALIASES, Gender.PREFER_NOT_TO_SAY),
        sensitivity=_sensitivity(_pick(raw, "sensitivity")),
        climate=climate,
        budget_tier=_choice(
            _pick(raw, "budget_tier"), BudgetTier, BUDGET_ALIASES, BudgetTier.MID_RANGE
        ),
        experience_level=_choice(
            _pick(raw, "experience_level"),
            ExperienceLevel,
            EXPERIENCE_ALIASES,
            ExperienceLevel.BEGINNER,
        ),
        goals=_tag_list(_pick(raw, "goals"), GOAL_ALIASES, "goal"),
        lifestyle=_tag(_text(_pick(raw, "lifestyle"))) or DEFAULT_LIFESTYLE,
        free_text_concerns=_text(_pick(raw, "free_text_concerns")),
        location=location,
        market=_market(_pick(raw, "market"), default_market),
    )
