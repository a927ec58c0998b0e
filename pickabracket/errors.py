"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def to_dict(self):
        """Return the JSON payload for this error."""
        return {"error": self.message}


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class DuplicateResourceError(AppError):
    """Raised when trying to create a resource that already exists."""

    def __init__(self, message="Resource already exists."):
        """Initialize the error."""
        super().__init__(message, 409)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class NoParticipantsError(AppError):
    """Raised when matches are generated for a tournament with no registrants."""

    def __init__(self, message="No participants found for this tournament."):
        """Initialize the error."""
        super().__init__(message, 400)


class NoCourtsError(AppError):
    """Raised when matches need courts but the tournament has none."""

    def __init__(
        self,
        message="No courts found. Please create courts before generating matches.",
        hint="Visit the tournament management page to create courts.",
    ):
        """Initialize the error."""
        super().__init__(message, 400)
        self.hint = hint

    def to_dict(self):
        """Include the hint for the tournament director."""
        return {"error": self.message, "hint": self.hint}


class NoMatchesError(AppError):
    """Raised when a round is advanced before any matches exist."""

    def __init__(self, message="No matches found for this tournament."):
        """Initialize the error."""
        super().__init__(message, 400)


class RoundIncompleteError(AppError):
    """Raised when the current round still has unfinished matches."""

    def __init__(self, incomplete_count, current_round):
        """Initialize the error."""
        super().__init__(
            f"Cannot advance round. {incomplete_count} match(es) still incomplete.",
            400,
        )
        self.incomplete_count = incomplete_count
        self.current_round = current_round

    def to_dict(self):
        """Include the counts so the caller can show what is outstanding."""
        return {
            "error": self.message,
            "incomplete_count": self.incomplete_count,
            "current_round": self.current_round,
        }


class InvalidWinnerCountError(AppError):
    """Raised when a completed round yields no winners at all."""

    def __init__(self, current_round):
        """Initialize the error."""
        super().__init__(f"No winners found in round {current_round}.", 500)
        self.current_round = current_round


class StaleRoundError(AppError):
    """Raised when another request already advanced the tournament."""

    def __init__(self, message="The tournament has already moved to another round."):
        """Initialize the error."""
        super().__init__(message, 409)
