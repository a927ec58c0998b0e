"""Routes for the match blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import current_app, jsonify

from pickabracket.errors import ValidationError
from pickabracket.utils import json_body

from . import bp
from .services import MatchService


@bp.route("/<string:match_id>", methods=["GET"])
def view_match(match_id: str) -> Any:
    return jsonify(MatchService.get_match(firestore.client(), match_id))


@bp.route("/<string:match_id>/score", methods=["POST"])
def submit_score(match_id: str) -> Any:
    """Submit game scores; the winner is derived from games won."""
    body = json_body()
    match = MatchService.submit_score(
        firestore.client(), match_id, body.get("games"), body.get("winner")
    )
    current_app.logger.info(f"Match {match_id} won by {match['winner']}.")
    return jsonify(match)


@bp.route("/<string:match_id>", methods=["PATCH"])
def update_match(match_id: str) -> Any:
    """Patch a match's scores, status or winner."""
    return jsonify(MatchService.update_match(firestore.client(), match_id, json_body()))


@bp.route("/<string:match_id>/court", methods=["PATCH"])
def assign_court(match_id: str) -> Any:
    """Assign a match to a court, or unassign it with a null court_id."""
    body = json_body()
    if "court_id" not in body:
        raise ValidationError("court_id is required (use null to unassign).")
    match = MatchService.assign_court(firestore.client(), match_id, body["court_id"])
    return jsonify({"match": match})
