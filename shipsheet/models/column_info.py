from __future__ import annotations

from dataclasses import dataclass

"""ColumnInfo model: one discovered column of a source spreadsheet header."""

__all__ = [
    "ColumnInfo",
]


@dataclass(frozen=True)
class ColumnInfo:
    """Header column discovered from row 0 of the first sheet.

    Produced once per opened file, ordered by index.
    """
    index: int  # 0-based position
    code: str  # spreadsheet letter code (A, B, ..., AA, ...)
    title: str  # decoded header cell text
