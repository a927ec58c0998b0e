"""Round-1 match generation for elimination brackets and round-robin pools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pickabracket.constants import (
    DEFAULT_POOL_LABELS,
    STATUS_COMPLETED,
    STATUS_SCHEDULED,
)
from pickabracket.errors import NoParticipantsError, ValidationError

if TYPE_CHECKING:
    from .models import Match


def bracket_size(count: int) -> int:
    """Smallest power of two that is at least ``count``."""
    size = 1
    while size < count:
        size <<= 1
    return size


def make_match(
    round_number: int,
    position: int,
    slot_a: Optional[str],
    slot_b: Optional[str],
    pool: Optional[str] = None,
) -> Match:
    """Build a match payload, auto-advancing ``slot_a`` when ``slot_b`` is a bye."""
    is_bye = slot_b is None
    return {
        "round": round_number,
        "position": position,
        "pool": pool,
        "slot_a": slot_a,
        "slot_b": slot_b,
        "status": STATUS_COMPLETED if is_bye else STATUS_SCHEDULED,
        "winner": slot_a if is_bye else None,
        "score_a": None,
        "score_b": None,
        "court_id": None,
    }


class TournamentGenerator:
    """Utility class for generating tournament matches."""

    @staticmethod
    def bracket_slots(seeded_ids: list[str]) -> list[Optional[str]]:
        """Lay seeds into a power-of-two slot array, byes as ``None``."""
        size = bracket_size(len(seeded_ids))
        slots: list[Optional[str]] = [None] * size
        for i, participant_id in enumerate(seeded_ids):
            slots[i] = participant_id
        return slots

    @staticmethod
    def build_bracket(seeded_ids: list[str]) -> list[Match]:
        """Generate round-1 single elimination pairings.

        Slot ``i`` meets slot ``size - 1 - i`` so the top seed faces the
        weakest entrant (or a bye). A lone participant yields no matches.
        """
        if not seeded_ids:
            raise NoParticipantsError()

        slots = TournamentGenerator.bracket_slots(seeded_ids)
        size = len(slots)
        return [
            make_match(1, i, slots[i], slots[size - 1 - i]) for i in range(size // 2)
        ]

    @staticmethod
    def distribute_pools(
        pool_labels: list[str], participant_ids: list[str]
    ) -> dict[str, list[str]]:
        """Deal participants into pools by index modulo the pool count."""
        if not pool_labels:
            raise ValidationError("At least one pool is required.")
        if len(set(pool_labels)) != len(pool_labels):
            raise ValidationError("Pool labels must be unique.")

        pools: dict[str, list[str]] = {label: [] for label in pool_labels}
        for index, participant_id in enumerate(participant_ids):
            pools[pool_labels[index % len(pool_labels)]].append(participant_id)
        return pools

    @staticmethod
    def build_pools(
        pool_labels: Optional[list[str]], participant_ids: list[str]
    ) -> list[Match]:
        """Generate a complete round robin inside every pool.

        Matches come out pool by pool in label order, each pool's pairs in
        (i, j) order with i < j. Positions are numbered across all pools.
        """
        if not participant_ids:
            raise NoParticipantsError()
        labels = list(pool_labels) if pool_labels else list(DEFAULT_POOL_LABELS)
        pools = TournamentGenerator.distribute_pools(labels, participant_ids)

        matches = []
        for label in labels:
            members = pools[label]
            for i in range(len(members)):
                for j in range(i + 1, len(members)):
                    matches.append(
                        make_match(1, len(matches), members[i], members[j], pool=label)
                    )
        return matches
