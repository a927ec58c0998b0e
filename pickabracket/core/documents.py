"""Firestore document helpers shared by the service layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from pickabracket.bracket.advancement import ordered
from pickabracket.constants import (
    COURTS_COLLECTION,
    MATCHES_COLLECTION,
    TOURNAMENTS_COLLECTION,
)
from pickabracket.errors import NotFoundError

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


def snapshot_to_dict(doc: DocumentSnapshot) -> dict[str, Any]:
    """Flatten a snapshot into its data with the document id folded in."""
    return {**(doc.to_dict() or {}), "id": doc.id}


def get_document(db: Client, collection: str, doc_id: str, label: str) -> dict[str, Any]:
    """Fetch one document or raise NotFoundError naming the ``label``."""
    doc = cast("DocumentSnapshot", db.collection(collection).document(doc_id).get())
    if not doc.exists:
        raise NotFoundError(f"{label} not found.")
    return snapshot_to_dict(doc)


def get_tournament_data(db: Client, tournament_id: str) -> dict[str, Any]:
    return get_document(db, TOURNAMENTS_COLLECTION, tournament_id, "Tournament")


def query_by_tournament(db: Client, collection: str, tournament_id: str) -> list[dict[str, Any]]:
    """All documents of ``collection`` that belong to the tournament."""
    docs = (
        db.collection(collection)
        .where(filter=firestore.FieldFilter("tournament_id", "==", tournament_id))
        .stream()
    )
    return [snapshot_to_dict(doc) for doc in docs]


def fetch_tournament_matches(db: Client, tournament_id: str) -> list[dict[str, Any]]:
    """Fetch the tournament's matches ordered by round, then generation order."""
    return ordered(query_by_tournament(db, MATCHES_COLLECTION, tournament_id))


def fetch_courts(db: Client, tournament_id: str) -> list[dict[str, Any]]:
    """Fetch the tournament's courts ordered by name."""
    courts = query_by_tournament(db, COURTS_COLLECTION, tournament_id)
    courts.sort(key=lambda c: (c.get("name") or "", c["id"]))
    return courts


def fetch_court_ids(db: Client, tournament_id: str) -> list[str]:
    return [court["id"] for court in fetch_courts(db, tournament_id)]


def match_doc_id(tournament_id: str, round_number: int, position: int) -> str:
    """Deterministic id so a round can only ever be written once."""
    return f"{tournament_id}-r{round_number}-m{position}"
