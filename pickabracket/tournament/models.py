"""Data models for the tournament blueprint."""

from __future__ import annotations

from typing import Any, Optional

from pickabracket.core.types import FirestoreDocument


class Player(FirestoreDocument, total=False):
    """A player document in Firestore."""

    name: str
    email: Optional[str]
    dupr: Optional[float]


class Registration(FirestoreDocument, total=False):
    """Links a player to a singles tournament."""

    tournament_id: str
    player_id: str
    seed: Optional[int]


class TournamentTeam(FirestoreDocument, total=False):
    """A doubles team entered into a tournament."""

    tournament_id: str
    team_name: str
    player1_id: str
    player2_id: Optional[str]
    rating: Optional[float]


class Tournament(FirestoreDocument, total=False):
    """A tournament document in Firestore."""

    name: str
    date: Any
    location: Optional[str]
    format: str
    tournament_type: str
    status: str
    current_round: int
    champion: Optional[str]
    final_round: Optional[int]
