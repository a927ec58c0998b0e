"""Common utilities for tests."""

from __future__ import annotations

import unittest
import unittest.mock
from typing import Any, Optional

from google.api_core.exceptions import AlreadyExists
from mockfirestore import CollectionReference, MockFirestore, Query
from mockfirestore.document import DocumentReference

from pickabracket import create_app

# Every module that talks to `firebase_admin.firestore`
FIRESTORE_TARGETS = (
    "pickabracket.tournament.routes.firestore",
    "pickabracket.tournament.services.firestore",
    "pickabracket.core.documents.firestore",
    "pickabracket.court.routes.firestore",
    "pickabracket.court.services.firestore",
    "pickabracket.match.routes.firestore",
)

MOCK_TIMESTAMP = "2023-01-01"


class MockFieldFilter:
    def __init__(self, field_path: str, op_string: str, value: Any) -> None:
        self.field_path = field_path
        self.op_string = op_string
        self.value = value


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore to support FieldFilter and equality."""

    def collection_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(CollectionReference, "_where"):
        CollectionReference._where = CollectionReference.where
        CollectionReference.where = collection_where

    if not hasattr(Query, "_where"):
        Query._where = Query.where
        Query.where = collection_where

    def doc_ref_eq(self: Any, other: Any) -> bool:
        if not isinstance(other, DocumentReference):
            return False
        return self._path == other._path

    if not hasattr(DocumentReference, "_orig_eq"):
        DocumentReference._orig_eq = DocumentReference.__eq__
        DocumentReference.__eq__ = doc_ref_eq
    DocumentReference.__hash__ = lambda self: hash(tuple(self._path))


class MockBatch:
    """Write batch that applies everything on commit, or nothing at all."""

    def __init__(self, db: Any) -> None:
        self.db = db
        self.writes: list[tuple[str, Any, Any]] = []
        self.commit = unittest.mock.MagicMock(side_effect=self._real_commit)

    def create(self, ref: Any, data: Any) -> None:
        self.writes.append(("create", ref, data))

    def set(self, ref: Any, data: Any, merge: bool = False) -> None:
        self.writes.append(("set", ref, data))

    def update(self, ref: Any, data: Any) -> None:
        self.writes.append(("update", ref, data))

    def _real_commit(self) -> None:
        for op, ref, _ in self.writes:
            if op == "create" and ref.get().exists:
                raise AlreadyExists(f"Document already exists: {ref.id}")
        for op, ref, data in self.writes:
            if op == "update":
                ref.update(data)
            else:
                ref.set(data)


def make_firestore_module(mock_db: MockFirestore) -> unittest.mock.MagicMock:
    """A stand-in for `firebase_admin.firestore` backed by ``mock_db``."""
    module = unittest.mock.MagicMock()
    module.client.return_value = mock_db
    module.FieldFilter = MockFieldFilter
    module.SERVER_TIMESTAMP = MOCK_TIMESTAMP
    return module


class FirestoreTestCase(unittest.TestCase):
    """Base test case with a fresh MockFirestore patched into every module."""

    def setUp(self) -> None:
        patch_mockfirestore()
        self.mock_db = MockFirestore()
        self.batches: list[MockBatch] = []

        def new_batch() -> MockBatch:
            batch = MockBatch(self.mock_db)
            self.batches.append(batch)
            return batch

        self.mock_db.batch = unittest.mock.MagicMock(side_effect=new_batch)
        self.mock_firestore_module = make_firestore_module(self.mock_db)

        for target in FIRESTORE_TARGETS:
            patcher = unittest.mock.patch(target, new=self.mock_firestore_module)
            patcher.start()
            self.addCleanup(patcher.stop)

    # Fixture helpers

    def add_tournament(self, tournament_id: str = "t1", **fields: Any) -> str:
        data = {
            "name": "Summer Open",
            "format": "single-elim",
            "tournament_type": "singles",
            "status": "Active",
            "current_round": 0,
        }
        data.update(fields)
        self.mock_db.collection("tournaments").document(tournament_id).set(data)
        return tournament_id

    def add_player(self, player_id: str, dupr: Optional[float] = None) -> str:
        self.mock_db.collection("players").document(player_id).set(
            {"name": player_id.title(), "dupr": dupr}
        )
        return player_id

    def register(self, tournament_id: str, player_id: str, dupr: Optional[float] = None) -> None:
        self.add_player(player_id, dupr)
        self.mock_db.collection("registrations").document(
            f"{tournament_id}_{player_id}"
        ).set({"tournament_id": tournament_id, "player_id": player_id})

    def add_court(self, tournament_id: str, court_id: str, name: str) -> str:
        self.mock_db.collection("courts").document(court_id).set(
            {"tournament_id": tournament_id, "name": name}
        )
        return court_id

    def add_match(self, match_id: str, **fields: Any) -> str:
        data = {
            "tournament_id": "t1",
            "round": 1,
            "position": 0,
            "pool": None,
            "slot_a": None,
            "slot_b": None,
            "status": "scheduled",
            "winner": None,
            "court_id": None,
        }
        data.update(fields)
        self.mock_db.collection("matches").document(match_id).set(data)
        return match_id

    def stored_matches(self, tournament_id: str = "t1") -> list[dict[str, Any]]:
        docs = self.mock_db.collection("matches").stream()
        matches = [
            {**doc.to_dict(), "id": doc.id}
            for doc in docs
            if doc.exists and doc.to_dict().get("tournament_id") == tournament_id
        ]
        return sorted(matches, key=lambda m: (m["round"], m["position"]))


class ApiTestCase(FirestoreTestCase):
    """FirestoreTestCase with a testing app and its client."""

    def setUp(self) -> None:
        super().setUp()
        self.app = create_app({"TESTING": True})
        self.client = self.app.test_client()
