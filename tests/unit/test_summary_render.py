from __future__ import annotations

from shipsheet.models import ConversionResult, ConvertedRow
from shipsheet.services.summary import render_summary_line


def _result(group_ids: list[int], duplicate_count: int) -> ConversionResult:
    rows = [ConvertedRow(f"n{i}", "1", "X", group_id=g) for i, g in enumerate(group_ids)]
    return ConversionResult(
        rows=rows,
        total_rows=len(rows),
        has_duplicates=duplicate_count > 0,
        duplicate_count=duplicate_count,
    )


def test_render_summary_line_no_duplicates():
    line = render_summary_line(_result([0, 0], 0))
    assert line == "SUMMARY rows=2 duplicates=0 groups=0 merged=false exported=0"


def test_render_summary_line_with_groups_merge_and_export():
    line = render_summary_line(_result([1, 1, 2, 2, 2, 0], 5), merged=True, exported=3)
    assert line == "SUMMARY rows=6 duplicates=5 groups=2 merged=true exported=3"
