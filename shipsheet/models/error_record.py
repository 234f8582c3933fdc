from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

One record per failed request (open / convert / merge / export). The JSON
keys are exactly the dataclass fields.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: source or output file involved ("" when none)
        operation: request that failed (columns/convert/merge/export/config)
        error_type: error classification in UPPER_SNAKE_CASE
        message: human-readable error message
    """
    timestamp: str
    file: str
    operation: str
    error_type: str
    message: str

    @staticmethod
    def create(file: str, operation: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            operation=operation,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
