"""Row shapes stored in the booking spreadsheet."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# Bookings tab. Date and time are located by header name; the rest are positional.
BOOKING_DATE_HEADER = "Booking Date"
BOOKING_TIME_HEADER = "Booking Time"
BOOKING_HEADERS = (
    "Timestamp",
    "Name",
    "Email",
    "Phone Number",
    "WhatsApp Number",
    BOOKING_DATE_HEADER,
    BOOKING_TIME_HEADER,
)

# Settings tab: fixed key/value block at A2:B4
SETTINGS_HEADERS = ("Setting", "Value")
WEEKDAYS_KEY = "availableWeekdays"
DISABLED_DATES_KEY = "disabledDates"
TIME_SLOTS_KEY = "availableTimeSlots"
SETTINGS_KEYS = (WEEKDAYS_KEY, DISABLED_DATES_KEY, TIME_SLOTS_KEY)

DEFAULT_WEEKDAYS = (1, 2, 3, 4, 5, 6)  # Mon-Sat, 0 is Sunday
DEFAULT_TIME_SLOTS = (
    "09:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "01:00 PM",
    "02:00 PM",
    "03:00 PM",
    "04:00 PM",
    "05:00 PM",
)


def _iso_timestamp(value: datetime) -> str:
    """Format a timestamp as UTC ISO 8601 with milliseconds and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class BookingRecord:
    """One confirmed booking, stored as a single appended row."""

    name: str
    email: str
    phone_number: str
    whatsapp_number: str
    booking_date: str
    booking_time: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_row(self) -> list[str]:
        """Render the record in BOOKING_HEADERS column order."""
        return [
            _iso_timestamp(self.timestamp),
            self.name,
            self.email,
            self.phone_number,
            self.whatsapp_number,
            self.booking_date,
            self.booking_time,
        ]


@dataclass
class SchedulerSettings:
    """Availability configuration kept in the settings tab."""

    available_weekdays: list[int] = field(default_factory=lambda: list(DEFAULT_WEEKDAYS))
    disabled_dates: list[str] = field(default_factory=list)
    available_time_slots: list[str] = field(default_factory=lambda: list(DEFAULT_TIME_SLOTS))

    @classmethod
    def defaults(cls) -> SchedulerSettings:
        return cls()

    def to_rows(self) -> list[list[str]]:
        """Serialize as the three key/value rows, comma-joined."""
        return [
            [WEEKDAYS_KEY, ",".join(str(day) for day in self.available_weekdays)],
            [DISABLED_DATES_KEY, ",".join(self.disabled_dates)],
            [TIME_SLOTS_KEY, ",".join(self.available_time_slots)],
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            WEEKDAYS_KEY: list(self.available_weekdays),
            DISABLED_DATES_KEY: list(self.disabled_dates),
            TIME_SLOTS_KEY: list(self.available_time_slots),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SchedulerSettings:
        """Build settings from the camelCase wire shape, defaulting missing keys."""
        defaults = cls.defaults()
        return cls(
            available_weekdays=[int(day) for day in data.get(WEEKDAYS_KEY, defaults.available_weekdays)],
            disabled_dates=list(data.get(DISABLED_DATES_KEY, defaults.disabled_dates)),
            available_time_slots=list(data.get(TIME_SLOTS_KEY, defaults.available_time_slots)),
        )
