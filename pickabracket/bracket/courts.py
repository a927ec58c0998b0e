"""Round-robin distribution of matches over a tournament's courts."""

from __future__ import annotations

from typing import Any

from pickabracket.errors import NoCourtsError


def allocate_courts(
    matches: list[dict[str, Any]], court_ids: list[str]
) -> list[dict[str, Any]]:
    """Assign ``court_ids[i % len(court_ids)]`` to the i-th match.

    The counter runs over the whole sequence, not per pool or round. Returns
    copies; the input matches are not modified.
    """
    if not court_ids:
        raise NoCourtsError()
    return [
        {**match, "court_id": court_ids[index % len(court_ids)]}
        for index, match in enumerate(matches)
    ]
