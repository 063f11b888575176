"""
RoutineAssembler — lay the final recommendations out as morning/evening steps.

Steps follow a fixed category order. Sunscreen is morning only, actives go
to the evening unless flagged for morning use, everything else appears in
both. Outdoor lifestyles and hot climates also get an afternoon sunscreen
top-up.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from skinmatch.config import get_settings
from skinmatch.schemas import (
    CatalogEntry,
    Climate,
    EntryCategory,
    ExperienceLevel,
    Market,
    Recommendation,
    RoutineStep,
    RoutineSuggestions,
    SkinType,
    Strength,
    StructuredRecommendations,
    UserProfile,
)
from skinmatch.tables import guidance

logger = logging.getLogger(__name__)

HOT_CLIMATES = {Climate.HOT_HUMID, Climate.HOT_DRY}


def usage_instructions(entry: CatalogEntry, profile: UserProfile) -> str:
    """Per-entry text if there is one, else per-category, plus safety notes."""
    if entry.id == "retinol":
        text = (
            guidance.RETINOL_BEGINNER_INSTRUCTIONS
            if profile.experience_level is ExperienceLevel.BEGINNER
            else guidance.RETINOL_INSTRUCTIONS
        )
    else:
        text = entry.instructions or guidance.CATEGORY_INSTRUCTIONS[entry.category]

    if profile.experience_level is ExperienceLevel.BEGINNER and entry.category is EntryCategory.ACTIVE:
        text = f"{text}. {guidance.BEGINNER_ACTIVE_NOTE}"
    if profile.sensitivity > 7 and entry.strength is not Strength.GENTLE:
        text = f"{text}. {guidance.PATCH_TEST_NOTE}"
    return text


def is_morning_active(entry: CatalogEntry) -> bool:
    return entry.morning_use or "vitamin_c" in entry.active_ingredients


def _step(number: int, rec: Recommendation, entry: CatalogEntry, instructions: str) -> RoutineStep:
    return RoutineStep(
        step=number,
        entry_id=rec.entry_id,
        display_name=rec.product.name if rec.product else entry.display_name,
        instructions=instructions,
        timing=guidance.WAIT_TIMES[entry.category],
        amount=guidance.APPLICATION_AMOUNTS[entry.category],
    )


def _number(steps: Iterable[tuple[Recommendation, CatalogEntry, str]]) -> list[RoutineStep]:
    return [_step(i, rec, entry, text) for i, (rec, entry, text) in enumerate(steps, 1)]


def wants_afternoon(profile: UserProfile, lifestyles: Optional[list[str]] = None) -> bool:
    if lifestyles is None:
        lifestyles = get_settings().afternoon_lifestyles
    return profile.lifestyle in lifestyles or profile.climate in HOT_CLIMATES


def routine_tips(profile: UserProfile) -> list[str]:
    tips = list(guidance.ROUTINE_TIPS)
    if profile.experience_level is ExperienceLevel.BEGINNER:
        tips.extend(guidance.BEGINNER_TIPS)
    if profile.climate is Climate.HOT_HUMID:
        tips.extend(guidance.HUMID_TIPS)
    if profile.skin_type is SkinType.SENSITIVE:
        tips.extend(guidance.SENSITIVE_TIPS)
    return tips


def assemble_routine(
    structured: StructuredRecommendations,
    profile: UserProfile,
    market: Market,
    lifestyles: Optional[list[str]] = None,
) -> RoutineSuggestions:
    recommendations = structured.flatten()
    morning, evening, afternoon = [], [], []

    for category in guidance.ROUTINE_ORDER:
        for rec in recommendations:
            entry = market.catalog[rec.entry_id]
            if entry.category is not category:
                continue
            text = usage_instructions(entry, profile)
            if category is EntryCategory.SUNSCREEN:
                morning.append((rec, entry, text))
                afternoon.append((rec, entry, guidance.AFTERNOON_INSTRUCTIONS))
            elif category is EntryCategory.ACTIVE:
                (morning if is_morning_active(entry) else evening).append((rec, entry, text))
            else:
                morning.append((rec, entry, text))
                evening.append((rec, entry, text))

    routine = RoutineSuggestions(
        morning=_number(morning),
        evening=_number(evening),
        tips=routine_tips(profile),
    )
    if afternoon and wants_afternoon(profile, lifestyles):
        steps = _number(afternoon[:1])
        routine.afternoon = [s.model_copy(update={"timing": guidance.AFTERNOON_TIMING}) for s in steps]
    logger.debug(
        f"Routine: {len(routine.morning)} morning, {len(routine.afternoon)} afternoon, "
        f"{len(routine.evening)} evening steps"
    )
    return routine
