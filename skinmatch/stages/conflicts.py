"""
ConflictResolver — greedy conflict-free selection over the interaction graph.

Candidates are walked in descending priority. A candidate whose tags touch
an already accepted tag is swapped for its fixed alternative when that is
clean, otherwise dropped. No backtracking.
"""

from __future__ import annotations

import logging

from skinmatch.schemas import Market, Recommendation
from skinmatch.tables.catalog import display_name
from skinmatch.tables.conflicts import CONFLICT_ALTERNATIVES, neighbours

logger = logging.getLogger(__name__)

CONFLICT_NOTE = "(alternative due to ingredient conflict)"


def has_conflict(tags: set[str], used_tags: set[str]) -> bool:
    """True if any tag conflicts with any used tag, checked in both directions."""
    return any(not neighbours(tag).isdisjoint(used_tags) for tag in tags) or any(
        not neighbours(used).isdisjoint(tags) for used in used_tags
    )


def resolve_conflicts(candidates: list[Recommendation], market: Market) -> list[Recommendation]:
    ordered = sorted(candidates, key=lambda rec: rec.priority, reverse=True)
    accepted: list[Recommendation] = []
    accepted_ids: set[str] = set()
    used_tags: set[str] = set()

    for rec in ordered:
        if rec.entry_id in accepted_ids:
            continue
        tags = market.catalog[rec.entry_id].conflict_tags
        if not tags or not has_conflict(tags, used_tags):
            accepted.append(rec)
            accepted_ids.add(rec.entry_id)
            used_tags |= tags
            continue

        alt_id = CONFLICT_ALTERNATIVES.get(rec.entry_id)
        alt_entry = market.catalog.get(alt_id) if alt_id else None
        if (
            alt_entry is not None
            and alt_id not in accepted_ids
            and not has_conflict(alt_entry.conflict_tags, used_tags)
        ):
            original = display_name(rec.entry_id)
            accepted.append(
                rec.model_copy(update={
                    "entry_id": alt_id,
                    "display_name": alt_entry.display_name,
                    "reasoning": f"Alternative to {original} {CONFLICT_NOTE}",
                })
            )
            accepted_ids.add(alt_id)
            used_tags |= alt_entry.conflict_tags
            logger.debug(f"Conflict: replaced {rec.entry_id} with {alt_id}")
        else:
            logger.debug(f"Conflict: dropped {rec.entry_id}")

    return accepted
