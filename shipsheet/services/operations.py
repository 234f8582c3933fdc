from __future__ import annotations

from collections.abc import Sequence

from ..excel.reader import format_number
from ..models.mapping import Operation

"""Operation engine: combine the decoded values of several source columns.

concat joins the values as-is. The arithmetic operations parse each value as a
float and silently drop values that do not parse; when nothing parses the
result is an empty string. divide skips zero divisors (the accumulator is left
unchanged) rather than failing the row.
"""

__all__ = [
    "apply_operation",
    "parse_numbers",
]


def parse_numbers(values: Sequence[str]) -> list[float]:
    """Parse the numeric values; others are skipped.

    Surrounding whitespace and digit-group underscores are not accepted
    (" 5" and "1_000" are not numbers).
    """
    nums: list[float] = []
    for v in values:
        if v != v.strip() or "_" in v:
            continue
        try:
            nums.append(float(v))
        except (TypeError, ValueError):
            continue
    return nums


def apply_operation(values: Sequence[str], operation: Operation | str) -> str:
    """Combine values (in source-index order) with operation into one string."""
    op = Operation.from_name(operation)
    if not values:
        return ""
    if op is Operation.CONCAT:
        return "".join(values)

    nums = parse_numbers(values)
    if not nums:
        return ""

    if op is Operation.ADD:
        # uncompensated left-to-right addition
        result = 0.0
        for x in nums:
            result += x
    elif op is Operation.SUBTRACT:
        result = nums[0]
        for x in nums[1:]:
            result -= x
    elif op is Operation.MULTIPLY:
        result = 1.0
        for x in nums:
            result *= x
    elif op is Operation.DIVIDE:
        result = nums[0]
        for x in nums[1:]:
            if x != 0:
                result /= x
    else:  # pragma: no cover - Operation is a closed enum
        raise AssertionError(f"unhandled operation: {op}")
    return format_number(result)
