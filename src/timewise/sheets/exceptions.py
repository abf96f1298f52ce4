"""Google Sheets integration exceptions."""


class SheetsError(Exception):
    """Base exception for spreadsheet integration errors."""

    pass


class SheetsConfigurationError(SheetsError):
    """Raised when a write is attempted without Sheets configured."""

    pass


class SheetsWriteError(SheetsError):
    """Raised when the Sheets API rejects a write.

    The message is safe to show to end users; the upstream error is
    chained as ``__cause__``.
    """

    pass


class SheetsReadError(SheetsError):
    """Raised by strict reads when the Sheets API cannot be read."""

    pass
