from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence
from dataclasses import replace

from ..models.converted_row import ConversionResult, ConvertedRow, IdentityKey

"""Duplicate grouping and merging keyed on the recipient identity.

The identity key is (recipient_name, recipient_phone, delivery_address).
Product fields never take part in grouping.
"""

__all__ = [
    "MERGE_SEPARATOR",
    "group_duplicates",
    "merge_duplicates",
    "merge_result",
]

# 全角セミコロン (出力テンプレートの複数商品区切り)
MERGE_SEPARATOR = "；"

_QUANTITY_RE = re.compile(r"\+?[0-9]+")


def group_duplicates(rows: Sequence[ConvertedRow]) -> ConversionResult:
    """Sort rows by identity key and tag rows whose key occurs more than once.

    Group ids are positive and allocated in the order keys are first met while
    walking the sorted rows. duplicate_count is the number of rows involved in
    duplication, not the number of groups.
    """
    ordered = sorted(rows, key=lambda r: r.identity_key)
    counts = Counter(r.identity_key for r in ordered)

    group_ids: dict[IdentityKey, int] = {}
    grouped: list[ConvertedRow] = []
    for row in ordered:
        key = row.identity_key
        if counts[key] < 2:
            grouped.append(replace(row, group_id=0))
            continue
        if key not in group_ids:
            group_ids[key] = len(group_ids) + 1
        grouped.append(replace(row, group_id=group_ids[key]))

    duplicate_count = sum(c for c in counts.values() if c >= 2)
    return ConversionResult(
        rows=grouped,
        total_rows=len(grouped),
        has_duplicates=duplicate_count > 0,
        duplicate_count=duplicate_count,
    )


def _parse_quantity(text: str) -> int:
    if _QUANTITY_RE.fullmatch(text):
        return int(text)
    return 1


def _append_distinct(values: list[str], value: str) -> None:
    if value and value not in values:
        values.append(value)


def _merge_group(key: IdentityKey, group: list[ConvertedRow]) -> ConvertedRow:
    product_names: list[str] = []
    product_specs: list[str] = []
    remarks: list[str] = []
    total_quantity = 0
    for r in group:
        _append_distinct(product_names, r.product_name)
        _append_distinct(product_specs, r.product_spec)
        _append_distinct(remarks, r.remarks)
        total_quantity += _parse_quantity(r.quantity)

    # 複数商品: 商品ごとに数量 1 / 単一商品: 数量合計
    if len(product_names) > 1:
        quantity = MERGE_SEPARATOR.join("1" for _ in product_names)
    else:
        quantity = str(total_quantity)

    name, phone, address = key
    return ConvertedRow(
        recipient_name=name,
        recipient_phone=phone,
        delivery_address=address,
        product_name=MERGE_SEPARATOR.join(product_names),
        product_spec=MERGE_SEPARATOR.join(product_specs),
        quantity=quantity,
        remarks=MERGE_SEPARATOR.join(remarks),
        group_id=0,
    )


def merge_duplicates(rows: Sequence[ConvertedRow]) -> list[ConvertedRow]:
    """Collapse rows sharing an identity key into one consolidated row each.

    Grouping is re-derived from the rows (existing group ids are ignored) and
    the output follows the first-occurrence order of each key in the input.
    """
    groups: dict[IdentityKey, list[ConvertedRow]] = {}
    for row in rows:
        groups.setdefault(row.identity_key, []).append(row)

    merged: list[ConvertedRow] = []
    for key, group in groups.items():
        if len(group) == 1:
            merged.append(replace(group[0], group_id=0))
        else:
            merged.append(_merge_group(key, group))
    return merged


def merge_result(rows: Sequence[ConvertedRow]) -> ConversionResult:
    """merge_duplicates wrapped as a ConversionResult (no duplicates remain)."""
    merged = merge_duplicates(rows)
    return ConversionResult(
        rows=merged,
        total_rows=len(merged),
        has_duplicates=False,
        duplicate_count=0,
    )
