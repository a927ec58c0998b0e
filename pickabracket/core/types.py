"""Core data types for the pickabracket application."""

from typing import Any, TypedDict


class _FirestoreDocumentBase(TypedDict):
    id: str


class FirestoreDocument(_FirestoreDocumentBase, total=False):
    """Generic Firestore document structure, with its id folded in."""

    created_at: Any
    updated_at: Any
