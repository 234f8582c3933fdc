from __future__ import annotations

import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

import pandas as pd
from openpyxl.worksheet.worksheet import Worksheet

from ..errors import WriteError
from ..models.converted_row import ConvertedRow

"""Excel writer for the shipping-order import sheet.

The header row and sheet name are fixed by the downstream order-import
template. All seven fields are written as text cells, verbatim.

The workbook is saved to a temporary file next to the target and moved into
place with os.replace, so a failed export never leaves a partial file behind.
"""

__all__ = [
    "OUTPUT_SHEET_NAME",
    "OUTPUT_HEADERS",
    "write_output",
]

OUTPUT_SHEET_NAME = "工作表1"

OUTPUT_HEADERS = [
    "收件人姓名（必填）",
    "收件人手机号（必填）",
    "收货地址（必填）",
    "商品名称(必填) -- 多商品用“；”隔开",
    "商品规格(非必填) -- 多商品用“；”隔开",
    "商品数量(必填) -- 多商品用“；”隔开",
    "备注（非必填）",
]


def _force_text_cells(ws: Worksheet) -> None:
    # openpyxl binds "=..." as a formula and "#N/A" etc. as an error
    for row in ws.iter_rows():
        for cell in row:
            if isinstance(cell.value, str):
                cell.data_type = "s"


def write_output(rows: Sequence[ConvertedRow], output_path: Path) -> int:
    """Write rows to output_path and return the number of data rows written.

    Raises:
        WriteError: on any serialization or I/O failure
    """
    output_path = Path(output_path)
    df = pd.DataFrame(
        [r.export_values() for r in rows],
        columns=OUTPUT_HEADERS,
        dtype=object,
    )

    temp_path: Path | None = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output_path.stem}.", suffix=".xlsx", dir=str(output_path.parent)
        )
        os.close(fd)
        temp_path = Path(tmp_name)
        with pd.ExcelWriter(temp_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=OUTPUT_SHEET_NAME, index=False)
            _force_text_cells(writer.sheets[OUTPUT_SHEET_NAME])
        os.replace(temp_path, output_path)
    except Exception as e:
        raise WriteError(f"failed to save {output_path}: {e}") from e
    finally:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()
    return len(rows)
