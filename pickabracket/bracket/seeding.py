"""Seeding participants by rating."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import Participant


def rating_of(participant: dict[str, Any]) -> float:
    """Return a participant's rating, treating missing values as 0."""
    value = participant.get("rating")
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def seed_participants(participants: list[Participant]) -> list[Participant]:
    """Return participants ordered by rating, highest first.

    The sort is stable so equally rated participants keep their input order.
    The input list is left untouched.
    """
    return sorted(participants, key=rating_of, reverse=True)


def team_rating(team: dict[str, Any], players: list[dict[str, Any] | None]) -> float:
    """Rating for a doubles team.

    An explicit ``rating`` on the team wins; otherwise the mean of its
    players' DUPR ratings, with unknown players counting as 0.
    """
    if team.get("rating") is not None:
        return rating_of(team)
    if not players:
        return 0.0
    total = sum(rating_of({"rating": (p or {}).get("dupr")}) for p in players)
    return total / len(players)
