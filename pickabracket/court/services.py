"""Service layer for court-related operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from firebase_admin import firestore

from pickabracket.bracket.advancement import is_terminal, ordered
from pickabracket.constants import COURTS_COLLECTION, MATCHES_COLLECTION, STATUS_LIVE
from pickabracket.core.documents import (
    fetch_courts,
    get_document,
    get_tournament_data,
    snapshot_to_dict,
)
from pickabracket.errors import ValidationError

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


class CourtService:
    """Service class for court-related operations."""

    @staticmethod
    def create_court(
        db: Client, tournament_id: str, name: str, location_notes: Optional[str] = None
    ) -> dict[str, Any]:
        """Create a court for a tournament."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Court name is required.")
        get_tournament_data(db, tournament_id)

        court = {
            "tournament_id": tournament_id,
            "name": name,
            "location_notes": (location_notes or "").strip() or None,
        }
        _, ref = db.collection(COURTS_COLLECTION).add(
            {**court, "created_at": firestore.SERVER_TIMESTAMP}
        )
        return {**court, "id": ref.id}

    @staticmethod
    def list_courts(db: Client, tournament_id: str) -> list[dict[str, Any]]:
        get_tournament_data(db, tournament_id)
        return fetch_courts(db, tournament_id)

    @staticmethod
    def get_court(db: Client, court_id: str) -> dict[str, Any]:
        return get_document(db, COURTS_COLLECTION, court_id, "Court")

    @staticmethod
    def update_court(
        db: Client, court_id: str, updates: dict[str, Any]
    ) -> dict[str, Any]:
        """Rename a court or change its location notes."""
        court = CourtService.get_court(db, court_id)

        update_data: dict[str, Any] = {}
        if updates.get("name") is not None:
            name = str(updates["name"]).strip()
            if not name:
                raise ValidationError("Court name cannot be empty.")
            update_data["name"] = name
        if "location_notes" in updates:
            update_data["location_notes"] = (
                str(updates["location_notes"] or "").strip() or None
            )
        if not update_data:
            raise ValidationError("No fields to update.")

        db.collection(COURTS_COLLECTION).document(court_id).update(update_data)
        return {**court, **update_data}

    @staticmethod
    def list_court_matches(db: Client, court_id: str) -> dict[str, Any]:
        """The court's queue: the match on court now, the one after, and the rest.

        Matches are played in round order, then generation order. A live
        match is always the current one.
        """
        court = CourtService.get_court(db, court_id)
        docs = (
            db.collection(MATCHES_COLLECTION)
            .where(filter=firestore.FieldFilter("court_id", "==", court_id))
            .stream()
        )
        matches = ordered([snapshot_to_dict(doc) for doc in docs])

        pending = [m for m in matches if not is_terminal(m)]
        live = [m for m in pending if m.get("status") == STATUS_LIVE]
        queue = live + [m for m in pending if m.get("status") != STATUS_LIVE]

        return {
            "court": court,
            "current_match": queue[0] if queue else None,
            "next_match": queue[1] if len(queue) > 1 else None,
            "upcoming_matches": queue[2:],
            "completed_matches": [m for m in matches if is_terminal(m)],
        }
