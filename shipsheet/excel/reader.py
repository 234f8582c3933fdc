from __future__ import annotations

import datetime as dt
import math
from pathlib import Path
from typing import Any

import numpy as np
import openpyxl
import pandas as pd

from ..errors import NoSheetError, OpenError, SheetReadError
from ..models.column_info import ColumnInfo

"""Excel reader: cell decoding, header discovery and raw row loading.

- Only the first sheet is read; row 0 is the header row.
- Every cell is decoded to a canonical string. Decoding never raises.
- The sheet is read through openpyxl directly: pandas would turn error cells
  into NaN and texts such as "NA" or "NULL" into missing values. Both must
  survive verbatim (a recipient called "NA" is still a recipient).
"""

__all__ = [
    "cell_to_string",
    "format_number",
    "get_cell",
    "column_code",
    "column_index",
    "read_first_sheet",
    "read_columns",
]


def format_number(value: float) -> str:
    """Render a number: whole values without a decimal point, others minimal.

    Phone numbers and IDs stored as floats would otherwise gain a trailing ".0".
    Fractions are always positional (1e-07 -> "0.0000001").
    """
    if not math.isfinite(value):
        return str(float(value))
    if float(value).is_integer():
        return str(int(value))
    return np.format_float_positional(float(value), trim="-")


def cell_to_string(value: Any) -> str:
    """Decode one raw cell value to its canonical string."""
    if value is None or value is pd.NA or value is pd.NaT:
        return ""
    if isinstance(value, str):
        return value
    # bool は int のサブクラスなので先に判定
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    if isinstance(value, (float, np.floating)):
        if math.isnan(value):
            return ""
        return format_number(float(value))
    if isinstance(value, (pd.Timedelta, dt.timedelta)):
        return str(value)
    if isinstance(value, (pd.Timestamp, dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    try:
        return str(value)
    except Exception:  # pragma: no cover - exotic objects with broken __str__
        return repr(value)


def get_cell(row: list[Any], index: int) -> str:
    """Decoded cell at index; short rows yield an empty string."""
    if index < 0 or index >= len(row):
        return ""
    return cell_to_string(row[index])


def column_code(index: int) -> str:
    """0-based column index -> bijective base-26 letter code (0 -> A, 26 -> AA)."""
    if index < 0:
        raise ValueError(f"column index must be non-negative: {index}")
    code = ""
    n = index
    while True:
        code = chr(ord("A") + n % 26) + code
        if n < 26:
            break
        n = n // 26 - 1
    return code


def column_index(code: str) -> int:
    """Letter code -> 0-based column index (inverse of column_code)."""
    text = code.strip().upper()
    if not text or not text.isascii() or not text.isalpha():
        raise ValueError(f"invalid column code: {code!r}")
    n = 0
    for ch in text:
        n = n * 26 + (ord(ch) - ord("A") + 1)
    return n - 1


def read_first_sheet(path: Path) -> list[list[Any]]:
    """Read the first sheet of a workbook as raw rows (header row included).

    Cached values are read instead of formulas. Error cells keep their tag
    text (e.g. "#DIV/0!").

    Raises:
        OpenError: file missing, unreadable or not a workbook
        NoSheetError: workbook has no sheet
        SheetReadError: first sheet cannot be parsed
    """
    try:
        wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except Exception as e:
        raise OpenError(f"cannot open file {path}: {e}") from e
    try:
        if not wb.worksheets:
            raise NoSheetError()
        ws = wb.worksheets[0]
        try:
            return [list(r) for r in ws.iter_rows(values_only=True)]
        except Exception as e:
            raise SheetReadError(f"cannot read sheet '{ws.title}' of {path}: {e}") from e
    finally:
        wb.close()


def read_columns(path: Path) -> list[ColumnInfo]:
    """Discover the header columns (row 0) of the first sheet."""
    rows = read_first_sheet(Path(path))
    if not rows:
        return []
    return [
        ColumnInfo(index=i, code=column_code(i), title=cell_to_string(cell))
        for i, cell in enumerate(rows[0])
    ]
