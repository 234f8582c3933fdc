from __future__ import annotations

"""Error kinds surfaced by shipsheet operations.

Every error is terminal for the request that raised it (no internal retry).
`error_type` is the UPPER_SNAKE classification written to the JSON Lines
error log.
"""

__all__ = [
    "ShipsheetError",
    "OpenError",
    "NoSheetError",
    "SheetReadError",
    "NoDataError",
    "WriteError",
    "LockError",
]


class ShipsheetError(Exception):
    """Base class for all request-level failures."""

    error_type = "SHIPSHEET_ERROR"


class OpenError(ShipsheetError):
    """Raised when a spreadsheet file cannot be opened or parsed."""

    error_type = "OPEN_ERROR"


class NoSheetError(ShipsheetError):
    """Raised when a workbook contains no worksheet."""

    error_type = "NO_SHEET"

    def __init__(self, message: str = "workbook contains no sheets") -> None:
        super().__init__(message)


class SheetReadError(ShipsheetError):
    """Raised when the first worksheet cannot be read."""

    error_type = "SHEET_READ_ERROR"


class NoDataError(ShipsheetError):
    """Raised when merge/export is requested before any conversion."""

    error_type = "NO_DATA"


class WriteError(ShipsheetError):
    """Raised when the output workbook cannot be written."""

    error_type = "WRITE_ERROR"


class LockError(ShipsheetError):
    """Raised when the session slot cannot be locked."""

    error_type = "LOCK_ERROR"
