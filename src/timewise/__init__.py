"""Google Sheets and Calendar integration for the booking scheduler."""

__version__ = "0.1.0"
