"""Service layer for match scoring and court assignment."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, cast

from pickabracket.constants import COURTS_COLLECTION, MATCHES_COLLECTION, STATUS_COMPLETED
from pickabracket.core.documents import get_document, get_tournament_data
from pickabracket.errors import ValidationError

from .models import MatchUpdate, ScoreSubmission

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from pickabracket.bracket.models import Match


class MatchService:
    """Service class for match-related operations."""

    @staticmethod
    def get_match(db: Client, match_id: str) -> Match:
        return cast("Match", get_document(db, MATCHES_COLLECTION, match_id, "Match"))

    @staticmethod
    def _ensure_result_editable(db: Client, match: Match) -> None:
        """Reject result changes on byes and on rounds that were already advanced."""
        if not match.get("slot_a") or not match.get("slot_b"):
            raise ValidationError("A bye cannot be scored or changed.")
        tournament = get_tournament_data(db, match["tournament_id"])
        match_round = match.get("round", 1)
        if match_round < (tournament.get("current_round") or 0):
            raise ValidationError(
                f"Round {match_round} has already been advanced; its results are final."
            )

    @staticmethod
    def submit_score(
        db: Client, match_id: str, games: Any, winner: Optional[str] = None
    ) -> dict[str, Any]:
        """Record game scores and decide the winner.

        The side that won more games wins. A submitted ``winner`` is only
        accepted when it agrees with the games; otherwise it is ignored.
        """
        match = MatchService.get_match(db, match_id)
        submission = ScoreSubmission(games=games, winner=winner)
        try:
            submission.validate()
        except ValueError as e:
            raise ValidationError(str(e)) from e

        MatchService._ensure_result_editable(db, match)

        won_a, won_b = submission.games_won()
        if won_a == won_b:
            raise ValidationError("Tie detected. Cannot determine winner.")
        calculated = match["slot_a"] if won_a > won_b else match["slot_b"]
        if winner and winner != calculated:
            logging.warning(
                f"Submitted winner {winner} for match {match_id} disagrees with "
                f"games; using {calculated}."
            )

        update_data = {
            "games": submission.games,
            "score_a": won_a,
            "score_b": won_b,
            "winner": calculated,
            "status": STATUS_COMPLETED,
        }
        db.collection(MATCHES_COLLECTION).document(match_id).update(update_data)
        return {**match, **update_data}

    @staticmethod
    def update_match(db: Client, match_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Apply a partial update of scores, status and winner.

        With both scores present the higher side wins; an explicit winner
        overrides that but must be one of the match's participants.
        """
        match = MatchService.get_match(db, match_id)
        update = MatchUpdate.from_dict(data)
        try:
            update.validate()
        except ValueError as e:
            raise ValidationError(str(e)) from e

        MatchService._ensure_result_editable(db, match)

        update_data: dict[str, Any] = {}
        if "score_a" in update.present:
            update_data["score_a"] = update.score_a
        if "score_b" in update.present:
            update_data["score_b"] = update.score_b
        if update.status:
            update_data["status"] = update.status

        if update.score_a is not None and update.score_b is not None:
            if update.score_a > update.score_b:
                update_data["winner"] = match["slot_a"]
            elif update.score_b > update.score_a:
                update_data["winner"] = match["slot_b"]

        if update.winner:
            if update.winner not in (match["slot_a"], match["slot_b"]):
                raise ValidationError("Winner must be one of the match's participants.")
            update_data["winner"] = update.winner

        if update_data.get("status") == STATUS_COMPLETED and not (
            update_data.get("winner") or match.get("winner")
        ):
            raise ValidationError("A completed match needs a winner.")
        if not update_data:
            raise ValidationError("No fields to update.")

        db.collection(MATCHES_COLLECTION).document(match_id).update(update_data)
        return {**match, **update_data}

    @staticmethod
    def assign_court(
        db: Client, match_id: str, court_id: Optional[str]
    ) -> dict[str, Any]:
        """Move a match to another court of its tournament, or clear its court."""
        match = MatchService.get_match(db, match_id)
        if court_id is not None:
            court = get_document(db, COURTS_COLLECTION, court_id, "Court")
            if court.get("tournament_id") != match.get("tournament_id"):
                raise ValidationError("Court belongs to a different tournament.")

        db.collection(MATCHES_COLLECTION).document(match_id).update({"court_id": court_id})
        return {**match, "court_id": court_id}
