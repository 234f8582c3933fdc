from __future__ import annotations

from ..models.converted_row import ConversionResult

"""Summary line rendering for the convert command.

Format:
SUMMARY rows={rows} duplicates={duplicates} groups={groups} merged={true|false} exported={exported}
"""


def render_summary_line(result: ConversionResult, *, merged: bool = False, exported: int = 0) -> str:
    """Render a SUMMARY line for a finished conversion.

    Args:
        result: ConversionResult before merging (duplicate statistics source)
        merged: whether duplicates were merged afterwards
        exported: number of rows written to the output workbook (0 = no export)

    Examples:
        >>> from shipsheet.models import ConversionResult
        >>> r = ConversionResult(rows=[], total_rows=0, has_duplicates=False, duplicate_count=0)
        >>> render_summary_line(r)
        'SUMMARY rows=0 duplicates=0 groups=0 merged=false exported=0'
    """
    return (
        f"SUMMARY rows={result.total_rows} "
        f"duplicates={result.duplicate_count} "
        f"groups={result.group_count} "
        f"merged={'true' if merged else 'false'} "
        f"exported={exported}"
    )
