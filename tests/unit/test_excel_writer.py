from __future__ import annotations
from pathlib import Path

import openpyxl
import pandas as pd
import pytest

from shipsheet.errors import WriteError
from shipsheet.excel.reader import read_first_sheet
from shipsheet.excel.writer import OUTPUT_HEADERS, OUTPUT_SHEET_NAME, write_output
from shipsheet.models import ConvertedRow


def test_write_output_fixed_sheet_header_and_text_cells(temp_workdir: Path):
    rows = [
        ConvertedRow("Alice", "13800000001", "BJ", "Widget；Gadget", "", "1；1", "gift", 0),
        ConvertedRow("Bob", "0139", "SH", "Cable", "1m", "4", "", 0),
    ]
    out = temp_workdir / "out.xlsx"
    assert write_output(rows, out) == 2

    xls = pd.ExcelFile(out)
    assert xls.sheet_names == [OUTPUT_SHEET_NAME]
    xls.close()

    raw = read_first_sheet(out)
    assert [str(v) for v in raw[0]] == OUTPUT_HEADERS
    assert raw[1][:4] == ["Alice", "13800000001", "BJ", "Widget；Gadget"]
    # 文字列セルとして保存される (先頭ゼロ維持)
    assert raw[2][1] == "0139"
    assert raw[2][5] == "4"


def test_write_output_empty_rows_writes_header_only(temp_workdir: Path):
    out = temp_workdir / "empty.xlsx"
    assert write_output([], out) == 0
    raw = read_first_sheet(out)
    assert len(raw) == 1


def test_write_output_failure_is_atomic(temp_workdir: Path):
    target = temp_workdir / "data"  # existing directory cannot be replaced by a file
    with pytest.raises(WriteError):
        write_output([ConvertedRow("A", "1", "X")], target)
    assert target.is_dir()
    assert list(temp_workdir.glob(".*.xlsx")) == []


def test_write_output_keeps_formula_like_text_as_strings(temp_workdir: Path):
    rows = [ConvertedRow("=HYPERLINK(\"x\")", "138", "BJ", "Widget", "#N/A", "1", "=1+1", 0)]
    out = temp_workdir / "formula.xlsx"
    write_output(rows, out)

    wb = openpyxl.load_workbook(out)
    ws = wb[OUTPUT_SHEET_NAME]
    assert ws["A2"].data_type == "s"
    assert ws["A2"].value == "=HYPERLINK(\"x\")"
    assert ws["E2"].data_type == "s"
    assert ws["E2"].value == "#N/A"
    assert ws["G2"].data_type == "s"
    assert ws["G2"].value == "=1+1"
    wb.close()

    raw = read_first_sheet(out)
    assert raw[1][6] == "=1+1"
