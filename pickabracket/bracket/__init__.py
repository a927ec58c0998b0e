"""Bracket, pool and round-advancement engine.

Everything in this package is storage-free: functions take match dicts and
return match dicts. Persistence lives in the tournament service.
"""

from .advancement import RoundAdvancer, round_state
from .courts import allocate_courts
from .generator import TournamentGenerator, bracket_size
from .models import Champion, Match, NextRound, Participant, RoundState
from .seeding import seed_participants

__all__ = [
    "Champion",
    "Match",
    "NextRound",
    "Participant",
    "RoundAdvancer",
    "RoundState",
    "TournamentGenerator",
    "allocate_courts",
    "bracket_size",
    "round_state",
    "seed_participants",
]
