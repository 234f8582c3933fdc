from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ..errors import LockError, NoDataError
from ..excel.writer import write_output
from ..models.converted_row import ConversionResult, ConvertedRow
from ..models.mapping import MappingTable
from .converter import read_and_convert, read_and_convert_with_mapping
from .duplicates import merge_result

"""Conversion session: holds the most recent conversion between requests.

convert -> (merge) -> export are separate user actions. The session keeps the
last completed row set (and its source path) in a single slot guarded by a
lock. Conversions run outside the lock and are published in one step, so
merge/export always see a complete snapshot and never a partial result.
"""

__all__ = [
    "ConversionSession",
    "LOCK_TIMEOUT_SECONDS",
]

logger = logging.getLogger(__name__)

LOCK_TIMEOUT_SECONDS = 5.0


class ConversionSession:
    """Single-slot store for the last conversion result."""

    def __init__(self, lock_timeout: float = LOCK_TIMEOUT_SECONDS) -> None:
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout
        self._rows: list[ConvertedRow] | None = None
        self._source_path: Path | None = None

    @contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise LockError(f"session is busy (lock not acquired within {self._lock_timeout}s)")
        try:
            yield
        finally:
            self._lock.release()

    @property
    def rows(self) -> list[ConvertedRow] | None:
        """Snapshot copy of the current rows (None before any conversion)."""
        with self._locked():
            return None if self._rows is None else list(self._rows)

    @property
    def source_path(self) -> Path | None:
        with self._locked():
            return self._source_path

    def _publish(self, rows: list[ConvertedRow], source_path: Path | None) -> None:
        with self._locked():
            self._rows = list(rows)
            if source_path is not None:
                self._source_path = source_path

    def convert(self, path: Path, mapping: MappingTable | None = None) -> ConversionResult:
        """Convert path (DEFAULT_MAPPING when mapping is None) and remember the result."""
        path = Path(path)
        if mapping is None:
            result = read_and_convert(path)
        else:
            result = read_and_convert_with_mapping(path, mapping)
        self._publish(result.rows, path)
        return result

    def merge(self) -> ConversionResult:
        """Merge duplicates of the current rows and replace them with the merged set.

        Raises:
            NoDataError: no conversion has completed yet
        """
        with self._locked():
            if self._rows is None:
                raise NoDataError("no data to merge; convert a file first")
            result = merge_result(self._rows)
            self._rows = list(result.rows)
        logger.info(f"merged duplicates: {result.total_rows} rows remain")
        return result

    def export(self, output_path: Path) -> int:
        """Write the current rows to output_path; returns the number of rows written.

        Raises:
            NoDataError: no conversion has completed yet
            WriteError: the workbook could not be saved
        """
        with self._locked():
            if self._rows is None:
                raise NoDataError("no data to export; convert a file first")
            count = write_output(self._rows, Path(output_path))
        logger.info(f"exported {count} rows to: {output_path}")
        return count
