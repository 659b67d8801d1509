class StatsError(Exception):
    """Base class for errors reported back to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StatsError):
    """Request fields are missing or contradictory."""

    status_code = 400


class NotFoundError(StatsError):
    """A referenced site namespace does not exist."""

    status_code = 404
