"""Tests for the Sheets API client wrapper."""

from unittest.mock import MagicMock

import pytest
from conftest import make_http_error, missing_range_error
from googleapiclient.errors import HttpError

from timewise.sheets import SheetsClient


@pytest.fixture
def service():
    return MagicMock()


@pytest.fixture
def client(service):
    return SheetsClient(service=service)


def values_api(service):
    return service.spreadsheets.return_value.values.return_value


class TestSheetsClient:
    """Test SheetsClient request building and response parsing."""

    def test_requires_auth_or_service(self):
        """Should refuse to build without a way to reach the API."""
        with pytest.raises(ValueError, match="requires a service account or a service"):
            SheetsClient()

    def test_builds_service_lazily(self):
        """Should build the Sheets v4 service on first use only."""
        auth = MagicMock()
        client = SheetsClient(auth)
        auth.build_service.assert_not_called()

        client.read_range("sheet-123", "Bookings")
        client.read_range("sheet-123", "Bookings")

        auth.build_service.assert_called_once_with("sheets", "v4")

    def test_read_range(self, client, service):
        """Should return the values array."""
        values_api(service).get.return_value.execute.return_value = {"values": [["a", "b"]]}

        assert client.read_range("sheet-123", "Bookings!A1:Z1") == [["a", "b"]]
        values_api(service).get.assert_called_once_with(
            spreadsheetId="sheet-123",
            range="Bookings!A1:Z1",
            valueRenderOption="FORMATTED_VALUE",
        )

    def test_read_range_without_values(self, client, service):
        """Should return an empty list for an empty range."""
        values_api(service).get.return_value.execute.return_value = {"range": "Bookings!A1:Z1"}
        assert client.read_range("sheet-123", "Bookings!A1:Z1") == []

    def test_read_range_propagates_errors(self, client, service):
        """Should let API errors reach the caller."""
        values_api(service).get.return_value.execute.side_effect = missing_range_error("X!A1")
        with pytest.raises(HttpError):
            client.read_range("sheet-123", "X!A1")

    def test_write_range(self, client, service):
        """Should send an update and return the updated cell count."""
        values_api(service).update.return_value.execute.return_value = {"updatedCells": 6}

        count = client.write_range("sheet-123", "Settings!A2:B4", [["k", "v"]] * 3, "RAW")

        assert count == 6
        values_api(service).update.assert_called_once_with(
            spreadsheetId="sheet-123",
            range="Settings!A2:B4",
            valueInputOption="RAW",
            body={"values": [["k", "v"]] * 3},
        )

    def test_append_rows(self, client, service):
        """Should insert rows and return the appended row count."""
        values_api(service).append.return_value.execute.return_value = {
            "updates": {"updatedRows": 1}
        }

        assert client.append_rows("sheet-123", "Bookings", [["row"]]) == 1
        values_api(service).append.assert_called_once_with(
            spreadsheetId="sheet-123",
            range="Bookings",
            valueInputOption="USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": [["row"]]},
        )

    def test_add_sheet(self, client, service):
        """Should request addSheet with the new title."""
        batch = service.spreadsheets.return_value.batchUpdate

        assert client.add_sheet("sheet-123", "Bookings") is None
        batch.assert_called_once_with(
            spreadsheetId="sheet-123",
            body={"requests": [{"addSheet": {"properties": {"title": "Bookings"}}}]},
        )
        batch.return_value.execute.assert_called_once_with()

    def test_add_sheet_propagates_errors(self, client, service):
        """Should let a name collision reach the caller."""
        service.spreadsheets.return_value.batchUpdate.return_value.execute.side_effect = (
            make_http_error(400, 'A sheet with the name "Bookings" already exists.')
        )
        with pytest.raises(HttpError):
            client.add_sheet("sheet-123", "Bookings")
