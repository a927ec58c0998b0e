"""Pool standings built from scored round-robin matches."""

from __future__ import annotations

from typing import Any


def aggregate_match_data(matches: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Iterate once through matches to build raw map of wins, losses, and point_diff.

    Every participant seen in a slot gets an entry, in order of first
    appearance, even before any of their matches are decided.
    """
    standings: dict[str, dict[str, Any]] = {}

    for match in matches:
        id_a = match.get("slot_a")
        id_b = match.get("slot_b")
        for pid in [id_a, id_b]:
            if pid and pid not in standings:
                standings[pid] = {
                    "id": pid,
                    "pool": match.get("pool"),
                    "wins": 0,
                    "losses": 0,
                    "point_diff": 0,
                }

        winner = match.get("winner")
        if not id_a or not id_b or winner not in (id_a, id_b):
            continue
        loser = id_b if winner == id_a else id_a
        standings[winner]["wins"] += 1
        standings[loser]["losses"] += 1

        score_a = match.get("score_a")
        score_b = match.get("score_b")
        if score_a is not None and score_b is not None:
            standings[id_a]["point_diff"] += score_a - score_b
            standings[id_b]["point_diff"] += score_b - score_a

    return standings


def sort_standings(raw_standings: dict[str, dict[str, Any]]) -> list[dict[str, Any]]:
    """Sort by wins (desc), losses (asc), then point_diff (desc)."""
    standings_list = list(raw_standings.values())
    # sorted() is stable, so ties keep seeding order
    return sorted(
        standings_list,
        key=lambda x: (x["wins"], -x["losses"], x.get("point_diff", 0)),
        reverse=True,
    )


def pool_standings(matches: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Group matches by pool label and rank each pool.

    Pools come back in generation order, which is the order their labels
    were given in, not alphabetical order.
    """
    by_pool: dict[str, list[dict[str, Any]]] = {}
    for match in sorted(matches, key=lambda m: (m.get("round", 1), m.get("position", 0))):
        pool = match.get("pool")
        if pool:
            by_pool.setdefault(pool, []).append(match)
    return {
        pool: sort_standings(aggregate_match_data(pool_matches))
        for pool, pool_matches in by_pool.items()
    }
