"""Google Calendar integration exceptions."""

from __future__ import annotations

from enum import Enum

from timewise.google.errors import error_message, error_reasons

INVALID_GRANT = "invalid_grant"
API_DISABLED_REASONS = frozenset({"accessNotConfigured", "SERVICE_DISABLED"})
API_DISABLED_MARKER = "API has not been used"


class CalendarFailure(Enum):
    """Kinds of calendar failure with dedicated user guidance."""

    INVALID_CREDENTIALS = "invalid_credentials"
    API_NOT_ENABLED = "api_not_enabled"
    OTHER = "other"


class CalendarError(Exception):
    """Base exception for calendar integration errors."""

    pass


class CalendarEventError(CalendarError):
    """Raised when a booking event could not be created.

    The message is safe to show to end users; the upstream error is
    chained as ``__cause__``.
    """

    def __init__(self, message: str, failure: CalendarFailure = CalendarFailure.OTHER):
        self.failure = failure
        super().__init__(message)


def classify_calendar_error(error: BaseException) -> CalendarFailure:
    """Classify an upstream Calendar error.

    Structured reason codes are checked first; message substrings are the
    fallback for errors that carry no codes.
    """
    reasons = error_reasons(error)
    if INVALID_GRANT in reasons:
        return CalendarFailure.INVALID_CREDENTIALS
    if reasons & API_DISABLED_REASONS:
        return CalendarFailure.API_NOT_ENABLED

    message = error_message(error)
    if INVALID_GRANT in message or INVALID_GRANT in str(error):
        return CalendarFailure.INVALID_CREDENTIALS
    if API_DISABLED_MARKER in message:
        return CalendarFailure.API_NOT_ENABLED
    return CalendarFailure.OTHER


def calendar_error_message(error: BaseException, failure: CalendarFailure | None = None) -> str:
    """Build the user-facing message for a Calendar failure."""
    failure = failure or classify_calendar_error(error)
    if failure is CalendarFailure.INVALID_CREDENTIALS:
        return (
            "Authentication failed with Google Calendar. "
            "Please check your service account credentials."
        )
    if failure is CalendarFailure.API_NOT_ENABLED:
        return (
            "The Google Calendar API is not enabled for your project. "
            "Please enable it in the Google Cloud Console."
        )
    return f"An error occurred with the Google Calendar API: {error_message(error)}"
