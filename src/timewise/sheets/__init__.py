"""Google Sheets storage for bookings and scheduler settings.

Bookings and availability settings live in a Google spreadsheet shared with
the scheduler's service account.

Usage:
    from timewise.config import SchedulerConfig
    from timewise.sheets import BookingRecord, SchedulerStore

    store = SchedulerStore.from_config(SchedulerConfig.from_env())

    # Availability
    counts = store.get_booking_counts_for_month(2026, 1)
    slots = store.get_booked_time_slots_for_day("2026-01-25")

    # Save a booking
    store.append_booking(BookingRecord(
        name="Ana", email="ana@example.com", phone_number="555-0100",
        whatsapp_number="555-0100", booking_date="2026-01-25", booking_time="10:00 AM",
    ))

    # Settings
    settings = store.get_scheduler_settings()       # defaults on failure
    settings = store.read_scheduler_settings()      # raises SheetsError on failure
    store.update_scheduler_settings(settings)

Setup:
    1. Create a service account and share the spreadsheet with its email
    2. Set GOOGLE_SERVICE_ACCOUNT_EMAIL, GOOGLE_PRIVATE_KEY and GOOGLE_SHEET_ID
"""

from __future__ import annotations

from timewise.sheets.client import SheetsClient
from timewise.sheets.exceptions import (
    SheetsConfigurationError,
    SheetsError,
    SheetsReadError,
    SheetsWriteError,
)
from timewise.sheets.models import BookingRecord, SchedulerSettings
from timewise.sheets.store import SchedulerStore

__all__ = [
    "SheetsClient",
    "SchedulerStore",
    "BookingRecord",
    "SchedulerSettings",
    "SheetsError",
    "SheetsConfigurationError",
    "SheetsReadError",
    "SheetsWriteError",
]
