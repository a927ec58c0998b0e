"""Data models for bracket generation and round advancement."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, TypedDict

from pickabracket.core.types import FirestoreDocument


class Participant(TypedDict, total=False):
    """A seedable entrant: a single player or a team."""

    id: str
    rating: float
    name: str
    kind: str  # player/team


class Match(FirestoreDocument, total=False):
    """A match document in Firestore."""

    tournament_id: str
    round: int
    position: int
    pool: Optional[str]
    slot_a: Optional[str]
    slot_b: Optional[str]
    team_a_id: Optional[str]
    team_b_id: Optional[str]
    status: str
    score_a: Optional[int]
    score_b: Optional[int]
    games: list[dict[str, int]]
    winner: Optional[str]
    court_id: Optional[str]


@dataclass
class NextRound:
    """Outcome of advancing a completed round that still has several winners."""

    current_round: int
    next_round: int
    winners: list[str]
    matches: list[dict[str, Any]] = field(default_factory=list)

    @property
    def matches_created(self) -> int:
        return len(self.matches)

    @property
    def winners_advanced(self) -> int:
        return len(self.winners)


@dataclass
class Champion:
    """Outcome of advancing a completed round with a single winner left."""

    champion: str
    final_round: int


@dataclass
class RoundState:
    """Read-only snapshot of where a tournament is in its schedule."""

    state: str
    current_round: int = 0
    total_matches: int = 0
    incomplete_matches: int = 0
    champion: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "state": self.state,
            "current_round": self.current_round,
            "total_matches": self.total_matches,
            "incomplete_matches": self.incomplete_matches,
        }
        if self.champion:
            data["champion"] = self.champion
        return data
