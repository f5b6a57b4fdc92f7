"""
Domain errors raised by the service layer. Routes translate them to HTTP responses.
"""


class HireTrackError(Exception):
    """Base class for service-level errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class InvalidInput(HireTrackError, ValueError):
    """Malformed or missing input (bad date, blank title, wrong file type)."""


class NotFound(HireTrackError, LookupError):
    """Record is absent or not owned by the caller. The two cases are not distinguished."""


class DeliveryFailure(HireTrackError, RuntimeError):
    """Notification transport error."""


class PersistenceFailure(HireTrackError, RuntimeError):
    """Query or write against the database failed."""
