"""Global constants for the pickabracket application."""

# Firestore collections
TOURNAMENTS_COLLECTION = "tournaments"
PLAYERS_COLLECTION = "players"
REGISTRATIONS_COLLECTION = "registrations"
TEAMS_COLLECTION = "teams"
COURTS_COLLECTION = "courts"
MATCHES_COLLECTION = "matches"

# Firestore rejects batches above 500 writes
FIRESTORE_BATCH_LIMIT = 500

# Match statuses
STATUS_SCHEDULED = "scheduled"
STATUS_LIVE = "live"
STATUS_COMPLETED = "completed"
# Older documents were written with "finished"
STATUS_FINISHED = "finished"
MATCH_STATUSES = (STATUS_SCHEDULED, STATUS_LIVE, STATUS_COMPLETED)
TERMINAL_STATUSES = frozenset({STATUS_COMPLETED, STATUS_FINISHED})

# Tournament formats and types
FORMAT_SINGLE_ELIM = "single-elim"
FORMAT_ROUND_ROBIN = "round-robin"
FORMAT_POOL_PLAY = "pool-play"
TOURNAMENT_FORMATS = (FORMAT_SINGLE_ELIM, FORMAT_ROUND_ROBIN, FORMAT_POOL_PLAY)
TYPE_SINGLES = "singles"
TYPE_DOUBLES = "doubles"

# Tournament statuses
TOURNAMENT_ACTIVE = "Active"
TOURNAMENT_COMPLETED = "Completed"

# Pool defaults
DEFAULT_POOL_LABELS = ("A", "B", "C", "D")
DEFAULT_TEAMS_PER_POOL = 4
