"""WarningGenerator — advisory warnings, introduction timeline and follow-up guidance."""

from __future__ import annotations

import logging

from skinmatch.schemas import (
    Climate,
    EntryCategory,
    ExperienceLevel,
    FollowUp,
    Market,
    Severity,
    Strength,
    StructuredRecommendations,
    UserProfile,
    WarningNotice,
)
from skinmatch.tables import guidance

logger = logging.getLogger(__name__)

SENSITIVITY_ESCALATION_THRESHOLD = 7


def _notice(kind: str, text_and_severity: tuple[str, Severity]) -> WarningNotice:
    message, severity = text_and_severity
    return WarningNotice(type=kind, message=message, severity=severity)


def generate_warnings(
    structured: StructuredRecommendations, profile: UserProfile, market: Market
) -> list[WarningNotice]:
    recommendations = structured.flatten()
    entries = [market.catalog[rec.entry_id] for rec in recommendations]
    warnings: list[WarningNotice] = []

    if any(entry.category is EntryCategory.ACTIVE for entry in entries):
        warnings.append(_notice("general", guidance.GENERAL_WARNING))
    if profile.experience_level is ExperienceLevel.BEGINNER:
        warnings.append(_notice("beginner", guidance.BEGINNER_WARNING))

    for rec, entry in zip(recommendations, entries):
        for tag in (entry.id, *entry.active_ingredients):
            if tag in guidance.INGREDIENT_WARNINGS:
                warnings.append(_notice("ingredient_specific", guidance.INGREDIENT_WARNINGS[tag]))
        if (
            profile.sensitivity > SENSITIVITY_ESCALATION_THRESHOLD
            and entry.category is EntryCategory.ACTIVE
            and entry.strength is not Strength.GENTLE
        ):
            warnings.append(WarningNotice(
                type="sensitivity",
                message=f"Due to your sensitive skin, introduce {rec.display_name or entry.display_name} very gradually.",
                severity=Severity.HIGH,
            ))

    if profile.climate is Climate.HOT_HUMID:
        warnings.append(_notice("climate", guidance.HUMID_CLIMATE_WARNING))
    for condition in profile.medical_conditions:
        if condition in guidance.CONDITION_WARNINGS:
            warnings.append(_notice("medical", guidance.CONDITION_WARNINGS[condition]))

    seen: set[str] = set()
    unique = []
    for warning in warnings:
        if warning.message not in seen:
            seen.add(warning.message)
            unique.append(warning)
    logger.debug(f"Generated {len(unique)} warnings")
    return unique


def build_timeline(profile: UserProfile) -> dict[str, str]:
    return dict(guidance.TIMELINES[guidance.timeline_tier(profile.experience_level)])


def build_follow_up(profile: UserProfile) -> FollowUp:
    beginner = profile.experience_level is ExperienceLevel.BEGINNER
    return FollowUp(
        reassessment_period="3 months" if beginner else "6 months",
        signs_to_watch=list(guidance.SIGNS_TO_WATCH),
        next_steps=list(guidance.NEXT_STEPS),
    )
