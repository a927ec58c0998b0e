"""Service layer for tournament business logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, cast

from firebase_admin import firestore
from google.api_core.exceptions import AlreadyExists

from pickabracket.bracket import (
    Champion,
    RoundAdvancer,
    TournamentGenerator,
    allocate_courts,
    bracket_size,
    round_state,
    seed_participants,
)
from pickabracket.bracket.advancement import current_round_of
from pickabracket.bracket.seeding import team_rating
from pickabracket.constants import (
    DEFAULT_POOL_LABELS,
    DEFAULT_TEAMS_PER_POOL,
    FIRESTORE_BATCH_LIMIT,
    FORMAT_POOL_PLAY,
    FORMAT_SINGLE_ELIM,
    MATCHES_COLLECTION,
    PLAYERS_COLLECTION,
    REGISTRATIONS_COLLECTION,
    TEAMS_COLLECTION,
    TOURNAMENT_ACTIVE,
    TOURNAMENT_COMPLETED,
    TOURNAMENT_FORMATS,
    TOURNAMENTS_COLLECTION,
    TYPE_DOUBLES,
    TYPE_SINGLES,
)
from pickabracket.core.documents import (
    fetch_court_ids,
    fetch_tournament_matches,
    get_document,
    get_tournament_data,
    match_doc_id,
    query_by_tournament,
    snapshot_to_dict,
)
from pickabracket.errors import (
    DuplicateResourceError,
    NoCourtsError,
    NoParticipantsError,
    StaleRoundError,
    ValidationError,
)

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

    from .models import Player, Registration, Tournament, TournamentTeam


class TournamentService:
    """Handles business logic and data access for tournaments."""

    @staticmethod
    def create_tournament(db: Client, data: dict[str, Any]) -> dict[str, Any]:
        """Create a tournament and return it with its ID."""
        name = (data.get("name") or "").strip()
        if not name:
            raise ValidationError("Tournament name is required.")
        tournament_format = data.get("format") or FORMAT_SINGLE_ELIM
        if tournament_format not in TOURNAMENT_FORMATS:
            raise ValidationError(f"Unknown tournament format '{tournament_format}'.")
        tournament_type = (data.get("tournament_type") or TYPE_SINGLES).lower()
        if tournament_type not in (TYPE_SINGLES, TYPE_DOUBLES):
            raise ValidationError(f"Unknown tournament type '{tournament_type}'.")

        payload = {
            "name": name,
            "date": data.get("date"),
            "location": data.get("location"),
            "format": tournament_format,
            "tournament_type": tournament_type,
            "status": TOURNAMENT_ACTIVE,
            "current_round": 0,
            "champion": None,
            "final_round": None,
        }
        _, ref = db.collection(TOURNAMENTS_COLLECTION).add(
            {**payload, "created_at": firestore.SERVER_TIMESTAMP}
        )
        return {**payload, "id": ref.id}

    @staticmethod
    def get_tournament(db: Client, tournament_id: str) -> dict[str, Any]:
        """Fetch a tournament with its participants and matches."""
        tournament = get_tournament_data(db, tournament_id)
        tournament["participants"] = TournamentService.list_participants(
            db, tournament_id, cast("Tournament", tournament)
        )
        tournament["matches"] = fetch_tournament_matches(db, tournament_id)
        return tournament

    @staticmethod
    def list_tournaments(db: Client) -> list[dict[str, Any]]:
        """Fetch all tournaments ordered by date, undated ones last."""
        tournaments = [
            snapshot_to_dict(doc)
            for doc in db.collection(TOURNAMENTS_COLLECTION).stream()
            if doc.exists
        ]
        tournaments.sort(key=lambda t: (t.get("date") is None, str(t.get("date") or "")))
        return tournaments

    @staticmethod
    def register_player(
        db: Client, tournament_id: str, data: dict[str, Any]
    ) -> Registration:
        """Register an existing player, or create one from name/email/dupr."""
        get_tournament_data(db, tournament_id)
        player_id = data.get("player_id")
        name = (data.get("name") or "").strip()

        if not player_id and not name:
            raise ValidationError("Either player_id or name is required to register.")

        if player_id:
            get_document(db, PLAYERS_COLLECTION, player_id, "Player")
        else:
            _, player_ref = db.collection(PLAYERS_COLLECTION).add(
                {
                    "name": name,
                    "email": data.get("email"),
                    "dupr": data.get("dupr"),
                    "created_at": firestore.SERVER_TIMESTAMP,
                }
            )
            player_id = player_ref.id

        registration_ref = db.collection(REGISTRATIONS_COLLECTION).document(
            f"{tournament_id}_{player_id}"
        )
        if cast("DocumentSnapshot", registration_ref.get()).exists:
            raise DuplicateResourceError("Player is already registered.")

        registration = {
            "tournament_id": tournament_id,
            "player_id": player_id,
            "seed": data.get("seed"),
        }
        registration_ref.set({**registration, "created_at": firestore.SERVER_TIMESTAMP})
        return {**registration, "id": registration_ref.id}

    @staticmethod
    def create_team(
        db: Client, tournament_id: str, data: dict[str, Any]
    ) -> TournamentTeam:
        """Enter a doubles team into the tournament."""
        get_tournament_data(db, tournament_id)
        team_name = (data.get("team_name") or "").strip()
        player1_id = data.get("player1_id")
        player2_id = data.get("player2_id") or None
        if not team_name or not player1_id:
            raise ValidationError("team_name and player1_id are required.")
        if player1_id == player2_id:
            raise ValidationError("A team needs two different players.")

        for pid in (player1_id, player2_id):
            if pid:
                get_document(db, PLAYERS_COLLECTION, pid, "Player")

        team = {
            "tournament_id": tournament_id,
            "team_name": team_name,
            "player1_id": player1_id,
            "player2_id": player2_id,
            "rating": data.get("rating"),
        }
        _, ref = db.collection(TEAMS_COLLECTION).add(
            {**team, "created_at": firestore.SERVER_TIMESTAMP}
        )
        return {**team, "id": ref.id}

    @staticmethod
    def list_teams(db: Client, tournament_id: str) -> list[dict[str, Any]]:
        get_tournament_data(db, tournament_id)
        return query_by_tournament(db, TEAMS_COLLECTION, tournament_id)

    @staticmethod
    def _players_by_id(db: Client, player_ids: list[str]) -> dict[str, Player]:
        if not player_ids:
            return {}
        refs = [db.collection(PLAYERS_COLLECTION).document(pid) for pid in player_ids]
        docs = cast(list[Any], db.get_all(refs))
        return {doc.id: cast("Player", snapshot_to_dict(doc)) for doc in docs if doc.exists}

    @staticmethod
    def list_participants(
        db: Client, tournament_id: str, tournament: Optional[Tournament] = None
    ) -> list[dict[str, Any]]:
        """Seedable participants: registered players, or teams for doubles."""
        if tournament is None:
            tournament = cast("Tournament", get_tournament_data(db, tournament_id))

        if tournament.get("tournament_type") == TYPE_DOUBLES:
            teams = query_by_tournament(db, TEAMS_COLLECTION, tournament_id)
            member_ids = [
                pid
                for team in teams
                for pid in (team.get("player1_id"), team.get("player2_id"))
                if pid
            ]
            players = TournamentService._players_by_id(db, list(dict.fromkeys(member_ids)))
            return [
                {
                    "id": team["id"],
                    "kind": "team",
                    "name": team.get("team_name"),
                    "rating": team_rating(
                        team,
                        [
                            players.get(pid)
                            for pid in (team.get("player1_id"), team.get("player2_id"))
                            if pid
                        ],
                    ),
                }
                for team in teams
            ]

        registrations = query_by_tournament(db, REGISTRATIONS_COLLECTION, tournament_id)
        player_ids = [r["player_id"] for r in registrations if r.get("player_id")]
        players = TournamentService._players_by_id(db, player_ids)
        return [
            {
                "id": pid,
                "kind": "player",
                "name": players[pid].get("name"),
                "rating": players[pid].get("dupr") or 0,
            }
            for pid in player_ids
            if pid in players
        ]

    @staticmethod
    def _write_round(
        db: Client,
        tournament_id: str,
        matches: list[dict[str, Any]],
        participant_kind: str,
        tournament_updates: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Create a whole round of matches in one batch.

        Match ids are derived from tournament, round and position, and are
        written with create(), so a round that already exists makes the entire
        batch fail instead of producing duplicates.
        """
        if len(matches) + 1 > FIRESTORE_BATCH_LIMIT:
            raise ValidationError(
                f"A single round cannot exceed {FIRESTORE_BATCH_LIMIT - 1} matches."
            )

        batch = db.batch()
        written = []
        for match in matches:
            doc_id = match_doc_id(tournament_id, match["round"], match["position"])
            payload = {**match, "tournament_id": tournament_id}
            if participant_kind == "team":
                payload["team_a_id"] = match["slot_a"]
                payload["team_b_id"] = match["slot_b"]
            batch.create(
                db.collection(MATCHES_COLLECTION).document(doc_id),
                {**payload, "created_at": firestore.SERVER_TIMESTAMP},
            )
            written.append({**payload, "id": doc_id})

        batch.update(
            db.collection(TOURNAMENTS_COLLECTION).document(tournament_id),
            tournament_updates,
        )
        try:
            batch.commit()
        except AlreadyExists as e:
            raise StaleRoundError(
                "These matches were already created by another request."
            ) from e
        return written

    @staticmethod
    def _ensure_not_generated(db: Client, tournament_id: str) -> None:
        if fetch_tournament_matches(db, tournament_id):
            raise DuplicateResourceError(
                "Matches have already been generated for this tournament."
            )

    @staticmethod
    def _participant_kind(tournament: Tournament) -> str:
        return "team" if tournament.get("tournament_type") == TYPE_DOUBLES else "player"

    @staticmethod
    def generate_bracket(db: Client, tournament_id: str) -> dict[str, Any]:
        """Seed participants and create round 1 of a single elimination bracket."""
        tournament = cast("Tournament", get_tournament_data(db, tournament_id))
        participants = TournamentService.list_participants(db, tournament_id, tournament)
        if not participants:
            raise NoParticipantsError()
        TournamentService._ensure_not_generated(db, tournament_id)

        seeded_ids = [p["id"] for p in seed_participants(participants)]
        size = bracket_size(len(seeded_ids))

        if len(seeded_ids) == 1:
            # Nobody to play: the lone entrant wins outright
            db.collection(TOURNAMENTS_COLLECTION).document(tournament_id).update(
                {"status": TOURNAMENT_COMPLETED, "champion": seeded_ids[0], "final_round": 0}
            )
            logging.info(f"Tournament {tournament_id} has a single entrant; champion decided.")
            return {"matches": [], "size": size, "byes": 0, "champion": seeded_ids[0]}

        matches = allocate_courts(
            TournamentGenerator.build_bracket(seeded_ids),
            fetch_court_ids(db, tournament_id),
        )
        written = TournamentService._write_round(
            db,
            tournament_id,
            matches,
            TournamentService._participant_kind(tournament),
            {"current_round": 1, "format": FORMAT_SINGLE_ELIM},
        )
        logging.info(
            f"Generated bracket of size {size} with {len(written)} matches "
            f"for tournament {tournament_id}."
        )
        return {
            "matches": written,
            "size": size,
            "byes": size - len(seeded_ids),
            "seeds": seeded_ids,
        }

    @staticmethod
    def generate_pools(
        db: Client,
        tournament_id: str,
        pools: Optional[list[str]] = None,
        teams_per_pool: int = DEFAULT_TEAMS_PER_POOL,
    ) -> dict[str, Any]:
        """Deal participants into pools and create every pool's round robin.

        ``teams_per_pool`` is advisory; every participant is placed no matter
        how full the pools get.
        """
        tournament = cast("Tournament", get_tournament_data(db, tournament_id))
        participants = TournamentService.list_participants(db, tournament_id, tournament)
        if not participants:
            raise NoParticipantsError()
        court_ids = fetch_court_ids(db, tournament_id)
        if not court_ids:
            raise NoCourtsError(
                "No courts found. Please create courts before generating pools."
            )
        TournamentService._ensure_not_generated(db, tournament_id)

        seeded_ids = [p["id"] for p in seed_participants(participants)]
        labels = [str(label) for label in pools] if pools else list(DEFAULT_POOL_LABELS)
        assignments = TournamentGenerator.distribute_pools(labels, seeded_ids)
        matches = TournamentGenerator.build_pools(labels, seeded_ids)
        written = TournamentService._write_round(
            db,
            tournament_id,
            allocate_courts(matches, court_ids),
            TournamentService._participant_kind(tournament),
            {"current_round": 1, "format": FORMAT_POOL_PLAY},
        )

        over_capacity = [p for p, ids in assignments.items() if len(ids) > teams_per_pool]
        if over_capacity:
            logging.warning(
                f"Pools {', '.join(over_capacity)} exceed {teams_per_pool} participants "
                f"in tournament {tournament_id}."
            )
        lonely = [p for p, ids in assignments.items() if len(ids) < 2]
        if lonely:
            logging.warning(
                f"Pools {', '.join(lonely)} have no matches in tournament "
                f"{tournament_id}; their members cannot advance."
            )
        logging.info(
            f"Generated {len(written)} pool matches across {len(assignments)} pools "
            f"for tournament {tournament_id}."
        )
        return {"matches": written, "pool_assignments": assignments}

    @staticmethod
    def advance_round(
        db: Client, tournament_id: str, expected_round: Optional[int] = None
    ) -> dict[str, Any]:
        """Validate the current round and create the next one (or crown a champion).

        Passing ``expected_round`` makes the call fail with StaleRoundError if
        the tournament is no longer on that round.
        """
        tournament = cast("Tournament", get_tournament_data(db, tournament_id))
        matches = fetch_tournament_matches(db, tournament_id)
        if not matches and tournament.get("champion"):
            # A lone entrant is crowned at generation time without any matches
            return {
                "message": "Tournament complete!",
                "champion": tournament["champion"],
                "final_round": tournament.get("final_round") or 0,
            }
        if matches and expected_round is not None:
            if current_round_of(matches) != expected_round:
                raise StaleRoundError(
                    f"Tournament is on round {current_round_of(matches)}, "
                    f"not round {expected_round}."
                )

        try:
            outcome = RoundAdvancer.plan(matches, fetch_court_ids(db, tournament_id))
        except NoCourtsError as e:
            raise NoCourtsError(
                "No courts found. Please create courts before advancing."
            ) from e

        if isinstance(outcome, Champion):
            if tournament.get("champion") != outcome.champion:
                db.collection(TOURNAMENTS_COLLECTION).document(tournament_id).update(
                    {
                        "status": TOURNAMENT_COMPLETED,
                        "champion": outcome.champion,
                        "final_round": outcome.final_round,
                    }
                )
                logging.info(
                    f"Tournament {tournament_id} complete; champion {outcome.champion}."
                )
            return {
                "message": "Tournament complete!",
                "champion": outcome.champion,
                "final_round": outcome.final_round,
            }

        written = TournamentService._write_round(
            db,
            tournament_id,
            outcome.matches,
            TournamentService._participant_kind(tournament),
            {"current_round": outcome.next_round},
        )
        logging.info(
            f"Advanced tournament {tournament_id} to round {outcome.next_round} "
            f"with {outcome.winners_advanced} winners."
        )
        return {
            "message": f"Advanced to Round {outcome.next_round}",
            "current_round": outcome.current_round,
            "next_round": outcome.next_round,
            "matches_created": len(written),
            "winners_advanced": outcome.winners_advanced,
            "matches": written,
        }

    @staticmethod
    def list_matches(db: Client, tournament_id: str) -> list[dict[str, Any]]:
        get_tournament_data(db, tournament_id)
        return fetch_tournament_matches(db, tournament_id)

    @staticmethod
    def get_round_state(db: Client, tournament_id: str) -> dict[str, Any]:
        """Report whether the current round is in progress, complete, or final."""
        get_tournament_data(db, tournament_id)
        return round_state(fetch_tournament_matches(db, tournament_id)).to_dict()

