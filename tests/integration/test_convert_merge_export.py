from __future__ import annotations

from pathlib import Path

from shipsheet.config.loader import load_config
from shipsheet.excel.reader import cell_to_string, read_first_sheet
from shipsheet.excel.writer import OUTPUT_HEADERS
from shipsheet.services.session import ConversionSession


def test_full_flow_convert_merge_export(orders_excel: Path, write_config: Path, temp_workdir: Path):
    cfg = load_config(write_config)
    session = ConversionSession()

    converted = session.convert(orders_excel, cfg.mappings)
    assert converted.total_rows == 5
    assert converted.has_duplicates is True
    assert converted.duplicate_count == 4
    assert [(r.recipient_name, r.group_id) for r in converted.rows] == [
        ("Alice", 1),
        ("Alice", 1),
        ("Bob", 2),
        ("Bob", 2),
        ("Carol", 0),
    ]

    merged = session.merge()
    assert merged.total_rows == 3

    out = temp_workdir / "export" / "orders_import.xlsx"
    assert session.export(out) == 3

    sheet = read_first_sheet(out)
    assert [str(v) for v in sheet[0]] == OUTPUT_HEADERS
    assert [[cell_to_string(v) for v in row] for row in sheet[1:]] == [
        ["Alice", "13800000001", "BJ1 Street", "Widget", "", "5", "gift"],
        ["Bob", "13900000002", "SH2 Road", "Gadget；Cable", "red；1m", "1；1", "fast"],
        ["Carol", "13700000003", "GZ3 Lane", "Widget", "", "1", ""],
    ]


def test_export_without_merge_keeps_sorted_duplicates(orders_excel: Path, write_config: Path, temp_workdir: Path):
    cfg = load_config(write_config)
    session = ConversionSession()
    session.convert(orders_excel, cfg.mappings)
    out = temp_workdir / "plain.xlsx"
    assert session.export(out) == 5
    names = [row[0] for row in read_first_sheet(out)[1:]]
    assert names == ["Alice", "Alice", "Bob", "Bob", "Carol"]


def test_merge_after_merge_is_stable(orders_excel: Path, write_config: Path):
    cfg = load_config(write_config)
    session = ConversionSession()
    session.convert(orders_excel, cfg.mappings)
    first = session.merge()
    second = session.merge()
    assert second.rows == first.rows
