"""Centralized scheduler configuration.

Settings come from environment variables, optionally seeded from an .env
file in the repository root:
    GOOGLE_SERVICE_ACCOUNT_EMAIL  - Service account identity
    GOOGLE_PRIVATE_KEY            - Service account PEM key (escaped newlines allowed)
    GOOGLE_SHEET_ID               - Spreadsheet used as the booking store
    GOOGLE_SHEET_NAME             - Bookings tab (default: Bookings)
    GOOGLE_SETTINGS_SHEET_NAME    - Settings tab (default: Settings)
    GOOGLE_CALENDAR_ID            - Calendar that receives booking events
    GOOGLE_MEET_LINK              - Static meeting link used as fallback
    TIMEWISE_EVENT_TITLE          - Event summary prefix (default: Booking)

This module auto-loads the .env file on import. Set TIMEWISE_ENV_FILE to
load a different file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Repository root (where this package is installed from)
# __file__ is src/timewise/config.py, so 3 levels up
REPO_ROOT = Path(__file__).parent.parent.parent
ENV_FILE = Path(os.environ.get("TIMEWISE_ENV_FILE", REPO_ROOT / ".env"))

DEFAULT_BOOKINGS_SHEET = "Bookings"
DEFAULT_SETTINGS_SHEET = "Settings"
DEFAULT_EVENT_TITLE = "Booking"


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            # Remove surrounding quotes
            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            # Only set if not already in environment (env vars take precedence)
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


def _env(name: str, default: str | None = None) -> str | None:
    """Read an environment variable, treating blank values as unset."""
    value = os.environ.get(name, "").strip()
    return value or default


@dataclass(frozen=True)
class SchedulerConfig:
    """Configuration shared by the Google clients and the integrations.

    Every field is optional. Components check the pieces they need and
    degrade when something is missing.
    """

    service_account_email: str | None = None
    private_key: str | None = None
    sheet_id: str | None = None
    bookings_sheet_name: str = DEFAULT_BOOKINGS_SHEET
    settings_sheet_name: str = DEFAULT_SETTINGS_SHEET
    calendar_id: str | None = None
    meet_link: str | None = None
    event_title: str = DEFAULT_EVENT_TITLE

    @classmethod
    def from_env(cls) -> SchedulerConfig:
        """Build configuration from environment variables.

        Returns:
            SchedulerConfig populated from the current environment.
        """
        return cls(
            service_account_email=_env("GOOGLE_SERVICE_ACCOUNT_EMAIL"),
            # Keep the raw key; the client factory normalizes it
            private_key=os.environ.get("GOOGLE_PRIVATE_KEY") or None,
            sheet_id=_env("GOOGLE_SHEET_ID"),
            bookings_sheet_name=_env("GOOGLE_SHEET_NAME", DEFAULT_BOOKINGS_SHEET),
            settings_sheet_name=_env("GOOGLE_SETTINGS_SHEET_NAME", DEFAULT_SETTINGS_SHEET),
            calendar_id=_env("GOOGLE_CALENDAR_ID"),
            meet_link=_env("GOOGLE_MEET_LINK"),
            event_title=_env("TIMEWISE_EVENT_TITLE", DEFAULT_EVENT_TITLE),
        )

    @property
    def has_credentials(self) -> bool:
        """Check if both service account values are present."""
        return bool(self.service_account_email and self.private_key)


def get_config_status(config: SchedulerConfig | None = None) -> dict:
    """Get status of the scheduler configuration.

    Secrets are reported as present/absent only.

    Args:
        config: Configuration to inspect. Defaults to the environment.

    Returns:
        Dictionary with configuration status.
    """
    config = config or SchedulerConfig.from_env()
    return {
        "repo_root": str(REPO_ROOT),
        "env_file": ENV_FILE.exists(),
        "google": {
            "service_account_email": config.service_account_email,
            "private_key": bool(config.private_key),
        },
        "sheets": {
            "sheet_id": bool(config.sheet_id),
            "bookings_sheet": config.bookings_sheet_name,
            "settings_sheet": config.settings_sheet_name,
        },
        "calendar": {
            "calendar_id": bool(config.calendar_id),
            "meet_link": bool(config.meet_link),
            "event_title": config.event_title,
        },
    }


# Auto-load .env from repo root on import
_loaded = _load_env_file(ENV_FILE)
