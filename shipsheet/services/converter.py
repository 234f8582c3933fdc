from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..excel.reader import get_cell, read_first_sheet
from ..models.converted_row import ConversionResult, ConvertedRow
from ..models.mapping import ColumnMapping, MappingTable, Operation, OutputField
from .duplicates import group_duplicates
from .operations import apply_operation
from .progress import ProgressTracker

"""Row converter: apply a mapping table to every data row of the first sheet.

- Row 0 is the header row and is skipped.
- Fields without a mapping keep their defaults (quantity="1", others "").
- Records whose name, phone and address are all empty are dropped.
- The result of read_and_convert_with_mapping is identity-key sorted and
  carries duplicate group ids (see services.duplicates).
"""

__all__ = [
    "DEFAULT_MAPPING",
    "convert_row",
    "convert_rows",
    "read_and_convert_with_mapping",
    "read_and_convert",
]

logger = logging.getLogger(__name__)

# 旧フォーマット (列マッピング未指定) 用の固定列プリセット
DEFAULT_MAPPING: MappingTable = {
    OutputField.RECIPIENT_NAME: ColumnMapping((64,), Operation.CONCAT),
    OutputField.RECIPIENT_PHONE: ColumnMapping((65,), Operation.CONCAT),
    OutputField.DELIVERY_ADDRESS: ColumnMapping((69,), Operation.CONCAT),
    OutputField.PRODUCT_NAME: ColumnMapping((82,), Operation.CONCAT),
    OutputField.REMARKS: ColumnMapping((0,), Operation.CONCAT),
}


def convert_row(row: Sequence[Any], mapping: MappingTable) -> ConvertedRow | None:
    """Convert one raw data row; None when the identity key is entirely empty."""
    cells = list(row)
    values: dict[str, str] = {}
    for field, column_mapping in mapping.items():
        sources = [get_cell(cells, idx) for idx in column_mapping.source_indices]
        values[field.value] = apply_operation(sources, column_mapping.operation)
    converted = ConvertedRow(**values)
    if not converted.has_identity():
        return None
    return converted


def convert_rows(
    sheet_rows: Sequence[Sequence[Any]],
    mapping: MappingTable,
    progress: ProgressTracker | None = None,
) -> list[ConvertedRow]:
    """Convert all data rows (sheet_rows[1:]) in source order."""
    converted: list[ConvertedRow] = []
    dropped = 0
    for row in sheet_rows[1:]:
        record = convert_row(row, mapping)
        if progress is not None:
            progress.update()
        if record is None:
            dropped += 1
            if progress is not None:
                progress.set_postfix(dropped=dropped)
            continue
        converted.append(record)
    if dropped:
        logger.debug(f"dropped {dropped} rows without recipient name/phone/address")
    return converted


def read_and_convert_with_mapping(path: Path, mapping: MappingTable) -> ConversionResult:
    """Read the first sheet of path, convert it with mapping and group duplicates.

    Raises:
        OpenError / NoSheetError / SheetReadError: see excel.reader.read_first_sheet
    """
    path = Path(path)
    sheet_rows = read_first_sheet(path)
    data_count = max(len(sheet_rows) - 1, 0)
    logger.info(f"Converting {data_count} data rows from: {path.name}")
    with ProgressTracker(data_count, description="Converting rows") as progress:
        rows = convert_rows(sheet_rows, mapping, progress=progress)
    result = group_duplicates(rows)
    logger.debug(
        f"converted rows={result.total_rows} duplicates={result.duplicate_count} groups={result.group_count}"
    )
    return result


def read_and_convert(path: Path) -> ConversionResult:
    """Convert path with the fixed-column DEFAULT_MAPPING preset."""
    return read_and_convert_with_mapping(path, DEFAULT_MAPPING)
