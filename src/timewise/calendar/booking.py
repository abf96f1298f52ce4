"""Calendar events for confirmed bookings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from timewise.calendar.client import CalendarClient
from timewise.calendar.exceptions import (
    CalendarEventError,
    calendar_error_message,
    classify_calendar_error,
)
from timewise.config import SchedulerConfig
from timewise.google.errors import error_details

logger = logging.getLogger(__name__)


@dataclass
class CalendarEventResult:
    """Links to hand back to the person who booked.

    ``hangout_link`` is the statically configured meeting link, present
    whether or not an event was created.
    """

    html_link: str | None = None
    hangout_link: str | None = None


class BookingCalendar:
    """Creates calendar events for bookings.

    Usage:
        calendar = BookingCalendar.from_config(SchedulerConfig.from_env())
        result = calendar.create_booking_event("Ana", "ana@example.com", start)
    """

    def __init__(self, config: SchedulerConfig, client: CalendarClient | None = None) -> None:
        """Initialize booking calendar.

        Args:
            config: Scheduler configuration (calendar id, meeting link, title).
            client: Calendar client, or None when Calendar is not configured.
        """
        self.config = config
        self._client = client

    @classmethod
    def from_config(cls, config: SchedulerConfig) -> BookingCalendar:
        """Create a booking calendar with a client built from the configured service account."""
        from timewise.clients import get_calendar_client

        return cls(config, get_calendar_client(config))

    def _describe(self, name: str, email: str) -> str:
        description = f"This is a booking confirmation for a meeting with {name} ({email})."
        if self.config.meet_link:
            description += f"\n\nJoin the meeting here: {self.config.meet_link}"
        return description

    def create_booking_event(self, name: str, email: str, booking_date: datetime) -> CalendarEventResult:
        """Create a one-hour event for a booking and invite the booker.

        Args:
            name: Name of the person who booked.
            email: Their email; added as attendee and notified.
            booking_date: Event start. Naive datetimes are treated as UTC.

        Returns:
            CalendarEventResult. Without a client or calendar id, only the
            static meeting link is returned and no event is created.

        Raises:
            CalendarEventError: If the Calendar API rejects the event.
        """
        meet_link = self.config.meet_link

        if self._client is None:
            logger.warning(
                "Google Calendar client not available due to missing credentials. "
                "Skipping event creation."
            )
            return CalendarEventResult(hangout_link=meet_link)

        if not self.config.calendar_id:
            logger.warning("GOOGLE_CALENDAR_ID is not set. Skipping event creation.")
            return CalendarEventResult(hangout_link=meet_link)

        try:
            event = self._client.create_event(
                calendar_id=self.config.calendar_id,
                summary=f"{self.config.event_title}: {name}",
                start=booking_date,
                description=self._describe(name, email),
                location=meet_link,
                attendees=[email],
                conference_link=meet_link,
            )
        except Exception as e:
            logger.error(f"Error creating Google Calendar event: {error_details(e)}")
            failure = classify_calendar_error(e)
            raise CalendarEventError(calendar_error_message(e, failure), failure) from e

        logger.info("Google Calendar event created successfully.")
        return CalendarEventResult(html_link=event.html_link, hangout_link=meet_link)
