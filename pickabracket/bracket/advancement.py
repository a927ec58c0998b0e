"""Round advancement: turn a finished round into the next one."""

from __future__ import annotations

from typing import Any, Union

from pickabracket.constants import TERMINAL_STATUSES
from pickabracket.errors import (
    InvalidWinnerCountError,
    NoMatchesError,
    RoundIncompleteError,
)

from .courts import allocate_courts
from .generator import make_match
from .models import Champion, NextRound, RoundState
from .standings import pool_standings

STATE_NOT_STARTED = "not_started"
STATE_IN_PROGRESS = "in_progress"
STATE_ROUND_COMPLETE = "round_complete"
STATE_COMPLETE = "complete"


def is_terminal(match: dict[str, Any]) -> bool:
    return match.get("status") in TERMINAL_STATUSES


def ordered(matches: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Sort matches by round, then by their generation position."""
    return sorted(matches, key=lambda m: (m.get("round", 1), m.get("position", 0)))


def current_round_of(matches: list[dict[str, Any]]) -> int:
    return max(m.get("round", 1) for m in matches)


def collect_winners(round_matches: list[dict[str, Any]]) -> list[str]:
    """Winners of a completed round, in match order.

    A pool round contributes its pool leaders in label order instead of the
    winner of every round-robin game.
    """
    if any(m.get("pool") for m in round_matches):
        return [
            ranking[0]["id"]
            for ranking in pool_standings(round_matches).values()
            if ranking
        ]

    winners: list[str] = []
    for match in ordered(round_matches):
        winner = match.get("winner")
        if winner and winner not in winners:
            winners.append(winner)
    return winners


def pair_winners(winners: list[str], round_number: int) -> list[dict[str, Any]]:
    """Pair winners two at a time; an odd one out gets a bye."""
    matches = []
    for i in range(0, len(winners), 2):
        slot_b = winners[i + 1] if i + 1 < len(winners) else None
        matches.append(make_match(round_number, i // 2, winners[i], slot_b))
    return matches


class RoundAdvancer:
    """State machine over a tournament's match set, keyed by round number."""

    @staticmethod
    def _completed_round(
        matches: list[dict[str, Any]],
    ) -> tuple[int, list[dict[str, Any]]]:
        if not matches:
            raise NoMatchesError()
        current_round = current_round_of(matches)
        round_matches = [m for m in matches if m.get("round", 1) == current_round]
        incomplete = [m for m in round_matches if not is_terminal(m)]
        if incomplete:
            raise RoundIncompleteError(len(incomplete), current_round)
        return current_round, round_matches

    @staticmethod
    def plan(
        matches: list[dict[str, Any]], court_ids: list[str]
    ) -> Union[NextRound, Champion]:
        """Work out the next round without touching any storage.

        Raises NoMatchesError, RoundIncompleteError, InvalidWinnerCountError,
        or NoCourtsError (only when a new round actually needs courts).
        """
        current_round, round_matches = RoundAdvancer._completed_round(matches)
        winners = collect_winners(round_matches)

        if not winners:
            raise InvalidWinnerCountError(current_round)
        if len(winners) == 1:
            return Champion(champion=winners[0], final_round=current_round)

        next_round = current_round + 1
        new_matches = allocate_courts(pair_winners(winners, next_round), court_ids)
        return NextRound(
            current_round=current_round,
            next_round=next_round,
            winners=winners,
            matches=new_matches,
        )


def round_state(matches: list[dict[str, Any]]) -> RoundState:
    """Describe the tournament's current position in its schedule."""
    if not matches:
        return RoundState(state=STATE_NOT_STARTED)

    current_round = current_round_of(matches)
    round_matches = [m for m in matches if m.get("round", 1) == current_round]
    incomplete = sum(1 for m in round_matches if not is_terminal(m))
    state = RoundState(
        state=STATE_IN_PROGRESS,
        current_round=current_round,
        total_matches=len(round_matches),
        incomplete_matches=incomplete,
    )
    if incomplete:
        return state

    winners = collect_winners(round_matches)
    if len(winners) == 1:
        state.state = STATE_COMPLETE
        state.champion = winners[0]
    else:
        state.state = STATE_ROUND_COMPLETE
    return state
