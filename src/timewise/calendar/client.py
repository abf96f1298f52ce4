"""Google Calendar API client implementation."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from timewise.google import GoogleServiceAccount


@dataclass
class Event:
    """Represents a Google Calendar event."""

    id: str
    summary: str
    start: datetime | None = None
    end: datetime | None = None
    description: str | None = None
    location: str | None = None
    status: str = "confirmed"
    html_link: str | None = None
    attendees: list[str] | None = None


class CalendarClient:
    """Google Calendar API client with service account authentication.

    API errors (googleapiclient HttpError, google-auth RefreshError)
    propagate to the caller.

    Usage:
        client = CalendarClient(auth)

        event = client.create_event(
            calendar_id="bookings@group.calendar.google.com",
            summary="Booking: Ana",
            start=datetime(2026, 1, 25, 10, 0, tzinfo=timezone.utc),
            attendees=["ana@example.com"],
        )
    """

    def __init__(
        self,
        auth: GoogleServiceAccount | None = None,
        service: Any = None,
    ) -> None:
        """Initialize Calendar client.

        Args:
            auth: Service account used to build the API service.
            service: Prebuilt Calendar v3 service (takes precedence over auth).
        """
        if auth is None and service is None:
            raise ValueError("CalendarClient requires a service account or a service")
        self._auth = auth
        self._service: Any = service

    def _get_service(self) -> Any:
        """Get or create Calendar API service."""
        if self._service is None:
            self._service = self._auth.build_service("calendar", "v3")
        return self._service

    # =========================================================================
    # Events
    # =========================================================================

    def create_event(
        self,
        calendar_id: str,
        summary: str,
        start: str | datetime,
        end: str | datetime | None = None,
        description: str | None = None,
        location: str | None = None,
        attendees: list[str] | None = None,
        conference_link: str | None = None,
        send_updates: str = "all",
    ) -> Event:
        """Create a new event.

        Naive datetimes are treated as UTC.

        Args:
            calendar_id: Calendar ID or "primary".
            summary: Event title.
            start: Start time as ISO string or datetime.
            end: End time (defaults to 1 hour after start).
            description: Event description.
            location: Event location.
            attendees: List of attendee email addresses.
            conference_link: Video meeting URL attached as a conference entry point.
            send_updates: Who gets notified ("all", "externalOnly" or "none").

        Returns:
            Created Event.
        """
        service = self._get_service()

        start_dt = self._to_utc(start)

        # Default end to 1 hour after start
        end_dt = start_dt + timedelta(hours=1) if end is None else self._to_utc(end)

        body: dict[str, Any] = {
            "summary": summary,
            "start": {"dateTime": start_dt.isoformat(), "timeZone": "UTC"},
            "end": {"dateTime": end_dt.isoformat(), "timeZone": "UTC"},
        }

        if description:
            body["description"] = description
        if location:
            body["location"] = location
        if attendees:
            body["attendees"] = [{"email": email} for email in attendees]
        if conference_link:
            body["conferenceData"] = {
                "entryPoints": [
                    {
                        "entryPointType": "video",
                        "uri": conference_link,
                        "label": "Join meeting",
                    }
                ]
            }

        result = (
            service.events()
            .insert(calendarId=calendar_id, body=body, sendUpdates=send_updates)
            .execute()
        )
        return self._parse_event(result)

    def _to_utc(self, value: str | datetime) -> datetime:
        """Parse an ISO string or datetime into an aware UTC datetime."""
        if isinstance(value, str):
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def _parse_event(self, data: dict) -> Event:
        """Parse event from API response."""
        # Parse start time
        start = None
        start_data = data.get("start", {})
        if "dateTime" in start_data:
            with contextlib.suppress(Exception):
                start = datetime.fromisoformat(start_data["dateTime"].replace("Z", "+00:00"))

        # Parse end time
        end = None
        end_data = data.get("end", {})
        if "dateTime" in end_data:
            with contextlib.suppress(Exception):
                end = datetime.fromisoformat(end_data["dateTime"].replace("Z", "+00:00"))

        # Parse attendees
        attendees = None
        if data.get("attendees"):
            attendees = [a.get("email", "") for a in data["attendees"]]

        return Event(
            id=data.get("id", ""),
            summary=data.get("summary", ""),
            start=start,
            end=end,
            description=data.get("description"),
            location=data.get("location"),
            status=data.get("status", "confirmed"),
            html_link=data.get("htmlLink"),
            attendees=attendees,
        )
