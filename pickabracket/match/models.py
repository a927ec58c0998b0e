"""Data models for the match blueprint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pickabracket.constants import MATCH_STATUSES, STATUS_COMPLETED, STATUS_FINISHED


def normalize_status(status: Optional[str]) -> Optional[str]:
    """Map the legacy 'finished' spelling onto 'completed'."""
    if status == STATUS_FINISHED:
        return STATUS_COMPLETED
    return status


@dataclass
class ScoreSubmission:
    """Dataclass for a best-of-N game score submission."""

    games: list[dict[str, Any]]
    winner: Optional[str] = None

    def validate(self) -> None:
        """Validate the submission for obvious errors."""
        if not isinstance(self.games, list) or not self.games:
            raise ValueError("games (non-empty array) is required.")
        for game in self.games:
            if not isinstance(game, dict) or "a" not in game or "b" not in game:
                raise ValueError("Each game needs an 'a' and a 'b' score.")
            for side in ("a", "b"):
                value = game[side]
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError("Game scores must be whole numbers.")
                if value < 0:
                    raise ValueError("Scores cannot be negative.")

    def games_won(self) -> tuple[int, int]:
        """Count games won by each side; drawn games count for nobody."""
        won_a = sum(1 for g in self.games if g["a"] > g["b"])
        won_b = sum(1 for g in self.games if g["b"] > g["a"])
        return won_a, won_b


@dataclass
class MatchUpdate:
    """Dataclass for a partial match update."""

    score_a: Optional[int] = None
    score_b: Optional[int] = None
    status: Optional[str] = None
    winner: Optional[str] = None
    present: set[str] = field(default_factory=set)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatchUpdate:
        keys = {"score_a", "score_b", "status", "winner"}
        return cls(
            score_a=data.get("score_a"),
            score_b=data.get("score_b"),
            status=normalize_status(data.get("status")),
            winner=data.get("winner"),
            present={k for k in keys if k in data},
        )

    def validate(self) -> None:
        for score in (self.score_a, self.score_b):
            if score is None:
                continue
            if isinstance(score, bool) or not isinstance(score, int):
                raise ValueError("Scores must be whole numbers.")
            if score < 0:
                raise ValueError("Scores cannot be negative.")
        if self.status is not None and self.status not in MATCH_STATUSES:
            raise ValueError(f"Unknown match status '{self.status}'.")
