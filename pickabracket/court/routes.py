"""Routes for the court blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import jsonify

from pickabracket.utils import json_body

from . import bp
from .services import CourtService


@bp.route("/<string:court_id>", methods=["GET"])
def view_court(court_id: str) -> Any:
    return jsonify(CourtService.get_court(firestore.client(), court_id))


@bp.route("/<string:court_id>", methods=["PATCH"])
def update_court(court_id: str) -> Any:
    """Update a court's name or location notes."""
    court = CourtService.update_court(firestore.client(), court_id, json_body())
    return jsonify({"court": court})


@bp.route("/<string:court_id>/matches", methods=["GET"])
def court_matches(court_id: str) -> Any:
    """The referee's view of a court: current, next and upcoming matches."""
    return jsonify(CourtService.list_court_matches(firestore.client(), court_id))
