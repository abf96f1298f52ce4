"""Client factory for the Google services the scheduler talks to.

Missing or malformed credentials never raise here: the factory logs the
problem and returns None, and every consumer falls back to its own
default behaviour.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from timewise.calendar.client import CalendarClient
from timewise.config import SchedulerConfig
from timewise.google import GoogleServiceAccount, InvalidPrivateKeyError
from timewise.sheets.client import SheetsClient

logger = logging.getLogger(__name__)

SCHEDULER_SCOPES = ["sheets", "calendar"]


@dataclass
class GoogleClients:
    """Sheets and Calendar clients sharing one service account."""

    sheets: SheetsClient
    calendar: CalendarClient


def load_service_account(config: SchedulerConfig) -> GoogleServiceAccount | None:
    """Build the service account described by the configuration.

    Args:
        config: Scheduler configuration.

    Returns:
        GoogleServiceAccount, or None if credentials are missing or invalid.
    """
    if not config.has_credentials:
        logger.warning(
            "Missing Google Service Account credentials. "
            "Google Sheets and Calendar integration will be disabled."
        )
        return None

    try:
        return GoogleServiceAccount(
            client_email=config.service_account_email,
            private_key=config.private_key,
            scopes=SCHEDULER_SCOPES,
        )
    except InvalidPrivateKeyError as e:
        logger.error(f"{e} Google Sheets and Calendar integration will be disabled.")
        return None


def build_clients(config: SchedulerConfig) -> GoogleClients | None:
    """Build both clients from a single service account.

    Returns:
        GoogleClients, or None if authentication is not configured.
    """
    auth = load_service_account(config)
    if auth is None:
        return None
    return GoogleClients(sheets=SheetsClient(auth), calendar=CalendarClient(auth))


def get_sheets_client(config: SchedulerConfig) -> SheetsClient | None:
    """Get a Sheets client if authentication is configured, otherwise None."""
    auth = load_service_account(config)
    if auth is None:
        return None
    return SheetsClient(auth)


def get_calendar_client(config: SchedulerConfig) -> CalendarClient | None:
    """Get a Calendar client if authentication is configured, otherwise None."""
    auth = load_service_account(config)
    if auth is None:
        return None
    return CalendarClient(auth)
