"""Routes for the tournament blueprint."""

from __future__ import annotations

import datetime
from typing import Any

from firebase_admin import firestore
from flask import current_app, jsonify

from pickabracket.court.services import CourtService
from pickabracket.errors import ValidationError
from pickabracket.utils import json_body, json_formdata, validate_form

from . import bp
from .forms import CourtForm, RegisterPlayerForm, TeamForm, TournamentForm
from .services import TournamentService


@bp.route("", methods=["POST"])
def create_tournament() -> Any:
    """Create a new tournament."""
    form = TournamentForm(formdata=json_formdata())
    validate_form(form)
    date_val = form.date.data
    tournament = TournamentService.create_tournament(
        firestore.client(),
        {
            "name": form.name.data,
            "date": datetime.datetime.combine(date_val, datetime.time.min)
            if date_val
            else None,
            "location": form.location.data or None,
            "format": form.format.data,
            "tournament_type": form.tournament_type.data,
        },
    )
    current_app.logger.info(f"Tournament {tournament['id']} created.")
    return jsonify({"tournament": tournament}), 201


@bp.route("", methods=["GET"])
def list_tournaments() -> Any:
    """List all tournaments."""
    return jsonify({"tournaments": TournamentService.list_tournaments(firestore.client())})


@bp.route("/<string:tournament_id>", methods=["GET"])
def view_tournament(tournament_id: str) -> Any:
    """View a single tournament with participants and matches."""
    return jsonify(TournamentService.get_tournament(firestore.client(), tournament_id))


@bp.route("/<string:tournament_id>/register", methods=["POST"])
def register_player(tournament_id: str) -> Any:
    """Register a player for a tournament."""
    form = RegisterPlayerForm(formdata=json_formdata())
    validate_form(form)
    registration = TournamentService.register_player(
        firestore.client(),
        tournament_id,
        {
            "player_id": form.player_id.data or None,
            "name": form.name.data,
            "email": form.email.data or None,
            "dupr": form.dupr.data,
            "seed": form.seed.data,
        },
    )
    return jsonify({"registration": registration}), 201


@bp.route("/<string:tournament_id>/participants", methods=["GET"])
def list_participants(tournament_id: str) -> Any:
    """List the players or teams that will be seeded."""
    participants = TournamentService.list_participants(firestore.client(), tournament_id)
    return jsonify({"participants": participants})


@bp.route("/<string:tournament_id>/teams", methods=["POST"])
def create_team(tournament_id: str) -> Any:
    """Enter a doubles team."""
    form = TeamForm(formdata=json_formdata())
    validate_form(form)
    team = TournamentService.create_team(
        firestore.client(),
        tournament_id,
        {
            "team_name": form.team_name.data,
            "player1_id": form.player1_id.data,
            "player2_id": form.player2_id.data or None,
            "rating": form.rating.data,
        },
    )
    return jsonify({"team": team}), 201


@bp.route("/<string:tournament_id>/teams", methods=["GET"])
def list_teams(tournament_id: str) -> Any:
    return jsonify({"teams": TournamentService.list_teams(firestore.client(), tournament_id)})


@bp.route("/<string:tournament_id>/generate", methods=["POST"])
def generate_bracket(tournament_id: str) -> Any:
    """Seed players and create the round-1 bracket."""
    result = TournamentService.generate_bracket(firestore.client(), tournament_id)
    return jsonify({"message": "Bracket generated", **result}), 201


@bp.route("/<string:tournament_id>/generate-pools", methods=["POST"])
def generate_pools(tournament_id: str) -> Any:
    """Split participants into pools and create their round robins."""
    body = json_body()
    pools = body.get("pools") or current_app.config["DEFAULT_POOL_LABELS"]
    if not isinstance(pools, list) or not all(isinstance(p, str) and p for p in pools):
        raise ValidationError("pools must be a list of pool labels.")
    teams_per_pool = body.get("teams_per_pool", current_app.config["DEFAULT_TEAMS_PER_POOL"])
    if isinstance(teams_per_pool, bool) or not isinstance(teams_per_pool, int) or teams_per_pool < 2:
        raise ValidationError("teams_per_pool must be a whole number of at least 2.")

    result = TournamentService.generate_pools(
        firestore.client(), tournament_id, pools, teams_per_pool
    )
    return (
        jsonify({"message": "Pool matches generated successfully", **result}),
        201,
    )


@bp.route("/<string:tournament_id>/advance-round", methods=["POST"])
def advance_round(tournament_id: str) -> Any:
    """Advance winners of the finished round, or report the champion."""
    expected_round = json_body().get("expected_round")
    if expected_round is not None and (
        isinstance(expected_round, bool) or not isinstance(expected_round, int)
    ):
        raise ValidationError("expected_round must be a round number.")

    result = TournamentService.advance_round(
        firestore.client(), tournament_id, expected_round
    )
    if "champion" in result:
        current_app.logger.info(
            f"Tournament {tournament_id} won by {result['champion']}."
        )
        return jsonify(result)
    return jsonify(result), 201


@bp.route("/<string:tournament_id>/matches", methods=["GET"])
def list_matches(tournament_id: str) -> Any:
    return jsonify({"matches": TournamentService.list_matches(firestore.client(), tournament_id)})


@bp.route("/<string:tournament_id>/state", methods=["GET"])
def round_state(tournament_id: str) -> Any:
    """Where the tournament stands: round in progress, complete, or won."""
    return jsonify(TournamentService.get_round_state(firestore.client(), tournament_id))


@bp.route("/<string:tournament_id>/courts", methods=["GET"])
def list_courts(tournament_id: str) -> Any:
    return jsonify({"courts": CourtService.list_courts(firestore.client(), tournament_id)})


@bp.route("/<string:tournament_id>/courts", methods=["POST"])
def create_court(tournament_id: str) -> Any:
    """Create a court for the tournament."""
    form = CourtForm(formdata=json_formdata())
    validate_form(form)
    court = CourtService.create_court(
        firestore.client(), tournament_id, form.name.data, form.location_notes.data
    )
    return jsonify({"court": court}), 201
