"""Google Sheets API client implementation."""

from __future__ import annotations

from typing import Any

from timewise.google import GoogleServiceAccount


class SheetsClient:
    """Google Sheets API client with service account authentication.

    Thin wrapper over the values and batchUpdate endpoints the scheduler
    uses. API errors (googleapiclient HttpError) propagate to the caller,
    which decides whether to degrade or fail.

    Usage:
        client = SheetsClient(auth)

        # Read values
        values = client.read_range(spreadsheet_id, "Bookings!A1:Z1")

        # Write values
        client.write_range(spreadsheet_id, "Bookings!A1", [["Timestamp", "Name"]])

        # Append rows
        client.append_rows(spreadsheet_id, "Bookings", [["2026-01-25T10:00:00Z", "Ana"]])
    """

    def __init__(
        self,
        auth: GoogleServiceAccount | None = None,
        service: Any = None,
    ) -> None:
        """Initialize Sheets client.

        Args:
            auth: Service account used to build the API service.
            service: Prebuilt Sheets v4 service (takes precedence over auth).
        """
        if auth is None and service is None:
            raise ValueError("SheetsClient requires a service account or a service")
        self._auth = auth
        self._service: Any = service

    def _get_service(self) -> Any:
        """Get or create Sheets API service."""
        if self._service is None:
            self._service = self._auth.build_service("sheets", "v4")
        return self._service

    # =========================================================================
    # Reading Data
    # =========================================================================

    def read_range(
        self,
        spreadsheet_id: str,
        range_notation: str,
        value_render_option: str = "FORMATTED_VALUE",
    ) -> list[list[Any]]:
        """Read values from a range.

        Args:
            spreadsheet_id: Spreadsheet ID.
            range_notation: A1 notation (e.g., "Bookings!A1:C10") or a bare sheet name.
            value_render_option: How to render values ("FORMATTED_VALUE", "UNFORMATTED_VALUE", "FORMULA").

        Returns:
            2D list of cell values. Trailing empty rows and cells are omitted by the API.
        """
        service = self._get_service()
        result = (
            service.spreadsheets()
            .values()
            .get(
                spreadsheetId=spreadsheet_id,
                range=range_notation,
                valueRenderOption=value_render_option,
            )
            .execute()
        )
        return result.get("values", [])

    # =========================================================================
    # Writing Data
    # =========================================================================

    def write_range(
        self,
        spreadsheet_id: str,
        range_notation: str,
        values: list[list[Any]],
        value_input_option: str = "USER_ENTERED",
    ) -> int:
        """Write values to a range.

        Args:
            spreadsheet_id: Spreadsheet ID.
            range_notation: A1 notation (e.g., "Settings!A2:B4").
            values: 2D list of values to write.
            value_input_option: How to interpret input ("RAW" or "USER_ENTERED").

        Returns:
            Number of cells updated.
        """
        service = self._get_service()
        result = (
            service.spreadsheets()
            .values()
            .update(
                spreadsheetId=spreadsheet_id,
                range=range_notation,
                valueInputOption=value_input_option,
                body={"values": values},
            )
            .execute()
        )
        return result.get("updatedCells", 0)

    def append_rows(
        self,
        spreadsheet_id: str,
        range_notation: str,
        values: list[list[Any]],
        value_input_option: str = "USER_ENTERED",
    ) -> int:
        """Append rows after the table found in a range.

        Args:
            spreadsheet_id: Spreadsheet ID.
            range_notation: Sheet name or A1 range locating the table.
            values: 2D list of rows to append.
            value_input_option: How to interpret input.

        Returns:
            Number of rows appended.
        """
        service = self._get_service()
        result = (
            service.spreadsheets()
            .values()
            .append(
                spreadsheetId=spreadsheet_id,
                range=range_notation,
                valueInputOption=value_input_option,
                insertDataOption="INSERT_ROWS",
                body={"values": values},
            )
            .execute()
        )
        updates = result.get("updates", {})
        return updates.get("updatedRows", 0)

    # =========================================================================
    # Sheet Management
    # =========================================================================

    def add_sheet(self, spreadsheet_id: str, title: str) -> None:
        """Add a new sheet to a spreadsheet.

        Args:
            spreadsheet_id: Spreadsheet ID.
            title: New sheet title.
        """
        service = self._get_service()
        service.spreadsheets().batchUpdate(
            spreadsheetId=spreadsheet_id,
            body={"requests": [{"addSheet": {"properties": {"title": title}}}]},
        ).execute()
