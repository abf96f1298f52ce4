"""Booking and settings storage on top of a Google spreadsheet.

The spreadsheet is shared with people who edit it by hand, so reads
tolerate missing tabs, missing headers, short rows and unparseable dates.
Reads degrade to empty or default values; writes fail loudly with a
message that is safe to show to end users.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser
from googleapiclient.errors import HttpError

from timewise.config import SchedulerConfig
from timewise.google.errors import error_message, is_already_exists_error, is_missing_range_error
from timewise.sheets.client import SheetsClient
from timewise.sheets.exceptions import SheetsConfigurationError, SheetsReadError, SheetsWriteError
from timewise.sheets.models import (
    BOOKING_DATE_HEADER,
    BOOKING_HEADERS,
    BOOKING_TIME_HEADER,
    DISABLED_DATES_KEY,
    SETTINGS_HEADERS,
    TIME_SLOTS_KEY,
    WEEKDAYS_KEY,
    BookingRecord,
    SchedulerSettings,
)

logger = logging.getLogger(__name__)

BOOKING_WRITE_FAILED = "Failed to save booking. Please try again later. (Reason: Google Sheets Error)"
SETTINGS_WRITE_FAILED = "Failed to save settings. Please try again later. (Reason: Google Sheets Error)"
SETTINGS_READ_FAILED = "Failed to read settings. Please try again later. (Reason: Google Sheets Error)"

# Settings values are plain strings; RAW keeps Sheets from reinterpreting
# a lone "09:00 AM" as a time value.
SETTINGS_INPUT_OPTION = "RAW"

# dateutil fills missing date parts from its default; two distinct defaults
# expose cells such as "10:00 AM" or "Oct 15" that lack a full date.
_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _cell(row: Sequence[Any], index: int) -> str:
    """Get a stripped cell value, or "" if the row is too short."""
    if index < len(row) and row[index] is not None:
        return str(row[index]).strip()
    return ""


def _header_index(headers: Sequence[Any], name: str) -> int:
    for index, header in enumerate(headers):
        if str(header).strip() == name:
            return index
    return -1


def _parse_booking_date(value: str) -> date | None:
    """Parse a full calendar date from a cell, or None if any part is missing."""
    try:
        first, second = (date_parser.parse(value, default=default).date() for default in _PARSE_DEFAULTS)
    except (ValueError, OverflowError):
        return None
    return first if first == second else None


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _parse_weekdays(value: str) -> list[int]:
    weekdays = []
    for part in _split(value):
        try:
            weekdays.append(int(part))
        except ValueError:
            logger.warning(f"Ignoring invalid weekday in settings sheet: {part}")
    return weekdays


def parse_settings_rows(rows: Sequence[Sequence[Any]]) -> SchedulerSettings:
    """Read the key/value settings block, filling defaults for missing keys.

    Args:
        rows: Rows below the header, each ``[key, value]``.

    Returns:
        SchedulerSettings with defaults for any key that is absent or blank.
    """
    values = {_cell(row, 0): _cell(row, 1) for row in rows if row}
    defaults = SchedulerSettings.defaults()

    weekdays = values.get(WEEKDAYS_KEY)
    disabled = values.get(DISABLED_DATES_KEY)
    slots = values.get(TIME_SLOTS_KEY)

    return SchedulerSettings(
        available_weekdays=_parse_weekdays(weekdays) if weekdays else defaults.available_weekdays,
        disabled_dates=_split(disabled) if disabled else defaults.disabled_dates,
        available_time_slots=_split(slots) if slots else defaults.available_time_slots,
    )


class SchedulerStore:
    """Spreadsheet-backed store for bookings and scheduler settings.

    Usage:
        store = SchedulerStore.from_config(SchedulerConfig.from_env())

        counts = store.get_booking_counts_for_month(2026, 1)
        slots = store.get_booked_time_slots_for_day("2026-01-25")
        store.append_booking(BookingRecord(...))

    A store without a client (credentials not configured) answers reads
    with empty values and refuses writes with SheetsConfigurationError.
    """

    def __init__(self, config: SchedulerConfig, client: SheetsClient | None = None) -> None:
        """Initialize the store.

        Args:
            config: Scheduler configuration (spreadsheet id and tab names).
            client: Sheets client, or None when Sheets is not configured.
        """
        self.config = config
        self._client = client

    @classmethod
    def from_config(cls, config: SchedulerConfig) -> SchedulerStore:
        """Create a store with a client built from the configured service account."""
        from timewise.clients import get_sheets_client

        return cls(config, get_sheets_client(config))

    @property
    def is_configured(self) -> bool:
        return self._client is not None and bool(self.config.sheet_id)

    def _require_client(self, action: str, verb: str = "save") -> tuple[SheetsClient, str]:
        """Get the client and spreadsheet id for a write or strict read, or raise."""
        if self._client is None:
            raise SheetsConfigurationError(
                "Configuration Error: Google Sheets integration is not configured "
                f"on the server. Cannot {verb} {action}."
            )
        if not self.config.sheet_id:
            raise SheetsConfigurationError("Configuration Error: GOOGLE_SHEET_ID is not configured.")
        return self._client, self.config.sheet_id

    # =========================================================================
    # Bookings
    # =========================================================================

    def _read_bookings(self) -> list[list[Any]] | None:
        """Read the whole bookings tab, or None if the store is unconfigured."""
        if self._client is None:
            logger.warning("Google Sheets client not available. Returning no bookings.")
            return None
        if not self.config.sheet_id:
            logger.warning("GOOGLE_SHEET_ID is not configured. Returning no bookings.")
            return None
        return self._client.read_range(self.config.sheet_id, self.config.bookings_sheet_name)

    def get_booking_counts_for_month(self, year: int, month: int) -> dict[str, int]:
        """Count bookings per day for one month.

        Args:
            year: Four-digit year.
            month: Month number, 1-12.

        Returns:
            Mapping of ISO date (YYYY-MM-DD) to number of bookings on that day.
        """
        if not 1 <= month <= 12:
            raise ValueError(f"month must be in 1..12, got {month}")

        try:
            rows = self._read_bookings()
        except Exception as e:
            logger.error(
                "Could not fetch booking counts due to a Google Sheets error. "
                f"Please check your configuration. Message: {error_message(e)}"
            )
            return {}

        if not rows:
            return {}

        date_index = _header_index(rows[0], BOOKING_DATE_HEADER)
        if date_index == -1:
            logger.warning(
                f'The booking sheet requires a "{BOOKING_DATE_HEADER}" column, but it was not '
                "found. Assuming no bookings for this month."
            )
            return {}

        counts: Counter[str] = Counter()
        for row in rows[1:]:
            date_str = _cell(row, date_index)
            if not date_str:
                continue
            booking_date = _parse_booking_date(date_str)
            if booking_date is None:
                logger.warning(f"Could not parse date from sheet: {date_str}")
                continue
            if booking_date.year == year and booking_date.month == month:
                counts[booking_date.isoformat()] += 1

        return dict(counts)

    def get_booked_time_slots_for_day(self, date: str) -> dict[str, int]:
        """Count bookings per time slot for one day.

        Args:
            date: Date string exactly as stored in the booking rows.

        Returns:
            Mapping of time string to number of bookings in that slot.
        """
        try:
            rows = self._read_bookings()
        except Exception as e:
            logger.error(
                "Could not fetch booked time slots due to a Google Sheets error. "
                f"Please check your configuration. Message: {error_message(e)}"
            )
            return {}

        if not rows or len(rows) < 2:
            return {}

        date_index = _header_index(rows[0], BOOKING_DATE_HEADER)
        time_index = _header_index(rows[0], BOOKING_TIME_HEADER)
        if date_index == -1 or time_index == -1:
            logger.warning(
                f'The booking sheet requires "{BOOKING_DATE_HEADER}" and "{BOOKING_TIME_HEADER}" '
                "columns, but one or both were not found. Assuming no booked slots for this day."
            )
            return {}

        target = date.strip()
        counts: Counter[str] = Counter()
        for row in rows[1:]:
            if _cell(row, date_index) != target:
                continue
            time = _cell(row, time_index)
            if time:
                counts[time] += 1

        return dict(counts)

    def append_booking(self, booking: BookingRecord) -> None:
        """Append one booking row, creating the tab and header if needed.

        Raises:
            SheetsConfigurationError: If Sheets is not configured.
            SheetsWriteError: If the Sheets API rejects the write.
        """
        client, sheet_id = self._require_client("booking")
        sheet_name = self.config.bookings_sheet_name

        try:
            self._ensure_sheet_and_header(client, sheet_id, sheet_name, BOOKING_HEADERS)
            client.append_rows(sheet_id, sheet_name, [booking.to_row()])
        except Exception as e:
            logger.error(
                "Could not append booking due to a Google Sheets error. "
                f"Please check your configuration. Message: {error_message(e)}"
            )
            raise SheetsWriteError(BOOKING_WRITE_FAILED) from e

        logger.info(f"Booking saved for {booking.booking_date} {booking.booking_time}")

    # =========================================================================
    # Settings
    # =========================================================================

    def get_scheduler_settings(self) -> SchedulerSettings:
        """Read scheduler settings, seeding the settings tab on first use.

        Returns:
            SchedulerSettings, or defaults if Sheets is unavailable.
        """
        if self._client is None:
            logger.warning("Google Sheets client not available. Using default scheduler settings.")
            return SchedulerSettings.defaults()
        if not self.config.sheet_id:
            logger.warning("GOOGLE_SHEET_ID is not configured. Using default scheduler settings.")
            return SchedulerSettings.defaults()

        try:
            return self.read_scheduler_settings()
        except SheetsReadError:
            logger.warning("Returning default settings due to Google Sheets API error.")
            return SchedulerSettings.defaults()

    def read_scheduler_settings(self) -> SchedulerSettings:
        """Read scheduler settings without falling back to defaults.

        Use this before a read-modify-write so a failed read cannot
        overwrite stored values with defaults.

        Raises:
            SheetsConfigurationError: If Sheets is not configured.
            SheetsReadError: If the Sheets API call fails.
        """
        client, sheet_id = self._require_client("settings", verb="read")
        sheet_name = self.config.settings_sheet_name

        try:
            self._ensure_settings_sheet(client, sheet_id, sheet_name)
            rows = client.read_range(sheet_id, f"{sheet_name}!A2:B")
        except Exception as e:
            logger.error(
                "Could not fetch scheduler settings due to a Google Sheets error. "
                f"Please check your configuration. Message: {error_message(e)}"
            )
            raise SheetsReadError(SETTINGS_READ_FAILED) from e

        return parse_settings_rows(rows)

    def update_scheduler_settings(self, settings: SchedulerSettings) -> None:
        """Overwrite the settings block.

        Raises:
            SheetsConfigurationError: If Sheets is not configured.
            SheetsWriteError: If the Sheets API rejects the write.
        """
        client, sheet_id = self._require_client("settings")
        sheet_name = self.config.settings_sheet_name

        try:
            self._ensure_settings_sheet(client, sheet_id, sheet_name)
            client.write_range(
                sheet_id,
                f"{sheet_name}!A2:B4",
                settings.to_rows(),
                value_input_option=SETTINGS_INPUT_OPTION,
            )
        except Exception as e:
            logger.error(
                "Could not update settings due to a Google Sheets error. "
                f"Please check your configuration. Message: {error_message(e)}"
            )
            raise SheetsWriteError(SETTINGS_WRITE_FAILED) from e

        logger.info("Scheduler settings updated")

    # =========================================================================
    # Sheet Management
    # =========================================================================

    def _ensure_sheet_and_header(
        self,
        client: SheetsClient,
        spreadsheet_id: str,
        sheet_name: str,
        headers: Sequence[str],
    ) -> bool:
        """Make sure a tab exists and has a header row.

        Returns:
            True if the header row was written.
        """
        try:
            existing = client.read_range(spreadsheet_id, f"{sheet_name}!A1:Z1")
        except HttpError as e:
            if not is_missing_range_error(e):
                raise
            logger.info(f"Sheet '{sheet_name}' does not exist, creating it")
            try:
                client.add_sheet(spreadsheet_id, sheet_name)
            except HttpError as add_error:
                if not is_already_exists_error(add_error):
                    raise
                logger.info(f"Sheet '{sheet_name}' was created concurrently")
            existing = []

        if existing and any(str(value).strip() for value in existing[0]):
            return False

        client.write_range(spreadsheet_id, f"{sheet_name}!A1", [list(headers)])
        return True

    def _ensure_settings_sheet(self, client: SheetsClient, spreadsheet_id: str, sheet_name: str) -> None:
        """Make sure the settings tab exists and holds all three keys."""
        defaults = SchedulerSettings.defaults().to_rows()

        try:
            self._ensure_sheet_and_header(client, spreadsheet_id, sheet_name, SETTINGS_HEADERS)
            rows = client.read_range(spreadsheet_id, f"{sheet_name}!A2:B4")
        except HttpError as e:
            if not is_missing_range_error(e):
                raise
            client.write_range(
                spreadsheet_id,
                f"{sheet_name}!A2",
                defaults,
                value_input_option=SETTINGS_INPUT_OPTION,
            )
            return

        present = {_cell(row, 0) for row in rows if row}
        missing = [row for row in defaults if row[0] not in present]
        if missing:
            logger.info(f"Seeding default settings: {', '.join(row[0] for row in missing)}")
            client.append_rows(
                spreadsheet_id,
                f"{sheet_name}!A2",
                missing,
                value_input_option=SETTINGS_INPUT_OPTION,
            )
