"""Google Calendar events for confirmed bookings.

Usage:
    from timewise.calendar import BookingCalendar
    from timewise.config import SchedulerConfig

    calendar = BookingCalendar.from_config(SchedulerConfig.from_env())
    result = calendar.create_booking_event(
        name="Ana",
        email="ana@example.com",
        booking_date=datetime(2026, 1, 25, 10, 0, tzinfo=timezone.utc),
    )
    print(result.html_link, result.hangout_link)

Setup:
    1. Share the booking calendar with the service account email
       ("Make changes to events")
    2. Set GOOGLE_CALENDAR_ID and, optionally, GOOGLE_MEET_LINK
"""

from __future__ import annotations

from timewise.calendar.booking import BookingCalendar, CalendarEventResult
from timewise.calendar.client import CalendarClient, Event
from timewise.calendar.exceptions import (
    CalendarError,
    CalendarEventError,
    CalendarFailure,
    classify_calendar_error,
)

__all__ = [
    "BookingCalendar",
    "CalendarEventResult",
    "CalendarClient",
    "Event",
    "CalendarError",
    "CalendarEventError",
    "CalendarFailure",
    "classify_calendar_error",
]
