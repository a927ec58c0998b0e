"""Core module for the pickabracket application."""

from .types import FirestoreDocument

__all__ = ["FirestoreDocument"]
