"""ProfileBuilder — derive prioritized concerns and risk attributes from an Assessment."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from skinmatch.schemas import Assessment, Gender, UserProfile
from skinmatch.tables.rules import AGE_YEARS, CONCERN_PRIORITY, GOAL_TO_CONCERN, HORMONAL_CONDITIONS

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    """Round .5 away from zero; the builtin round() would bank 2.5 down to 2."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _age_score(age: int) -> int:
    if age < 25:
        return 1
    if age < 35:
        return 2
    if age < 45:
        return 3
    return 4


def prioritize_concerns(concerns: list[str], goals: list[str]) -> list[str]:
    """Concerns plus goal-implied concerns, stable-sorted by priority weight."""
    merged = list(dict.fromkeys(concerns))
    for goal in goals:
        concern = GOAL_TO_CONCERN.get(goal) or (goal if goal in CONCERN_PRIORITY else None)
        if concern and concern not in merged:
            merged.append(concern)
    return sorted(merged, key=lambda c: CONCERN_PRIORITY.get(c, 0), reverse=True)


def build_profile(assessment: Assessment) -> UserProfile:
    experience = assessment.experience_level.rank
    age = AGE_YEARS[assessment.age_bracket]
    prioritized = prioritize_concerns(assessment.concerns, assessment.goals)

    hormonal = bool(HORMONAL_CONDITIONS.intersection(assessment.medical_conditions)) or (
        assessment.gender is Gender.FEMALE and (age < 25 or age > 40)
    )

    profile = UserProfile(
        **assessment.model_dump(),
        prioritized_concerns=prioritized,
        risk_tolerance=_round_half_up((experience + (11 - assessment.sensitivity)) / 2),
        routine_complexity=_round_half_up((experience + _age_score(age)) / 2),
        primary_concern=prioritized[0] if prioritized else "maintenance",
        age=age,
        has_hormonal_issues=hormonal,
    )
    logger.debug(
        f"Profile built: concerns={profile.prioritized_concerns}, "
        f"risk={profile.risk_tolerance}, complexity={profile.routine_complexity}"
    )
    return profile
