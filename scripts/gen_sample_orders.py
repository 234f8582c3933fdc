#!/usr/bin/env python3
"""Sample order workbook generator.

Writes a spreadsheet shaped like a marketplace order export: one header row,
then one line per ordered item. A share of the lines repeat an earlier
recipient (same name, phone and address) so that duplicate grouping and
merging have something to do.

The matching mapping config is printed after generation.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

HEADERS = ["订单号", "收货人", "联系电话", "省", "市", "详细地址", "商品", "规格", "单价", "件数", "买家留言"]

PRODUCTS = [("保温杯", "500ml"), ("帆布包", "大号"), ("数据线", "1米"), ("茶叶", "250g"), ("雨伞", "")]
CITIES = [("浙江省", "杭州市"), ("广东省", "深圳市"), ("四川省", "成都市"), ("江苏省", "南京市")]
NAMES = ["张三", "李四", "王五", "赵六", "钱七", "孙八", "周九", "吴十"]

SAMPLE_MAPPING = """mappings:
  recipient_name: {columns: [B], operation: concat}
  recipient_phone: {columns: [C], operation: concat}
  delivery_address: {columns: [D, E, F], operation: concat}
  product_name: {columns: [G], operation: concat}
  product_spec: {columns: [H], operation: concat}
  quantity: {columns: [J], operation: add}
  remarks: {columns: [K], operation: concat}
"""


def generate_orders(rows: int, duplicate_ratio: float, seed: int = 42) -> pd.DataFrame:
    """Generate order lines; about duplicate_ratio of them reuse an earlier recipient."""
    rng = np.random.default_rng(seed)
    recipients: list[tuple[str, int, str, str, str]] = []
    lines: list[list[object]] = []
    for i in range(rows):
        if recipients and rng.random() < duplicate_ratio:
            recipient = recipients[int(rng.integers(len(recipients)))]
        else:
            province, city = CITIES[int(rng.integers(len(CITIES)))]
            recipient = (
                NAMES[int(rng.integers(len(NAMES)))],
                int(rng.integers(13000000000, 13999999999)),  # 数値セル (.0 付与の検証用)
                province,
                city,
                f"{int(rng.integers(1, 999))}号",
            )
            recipients.append(recipient)
        product, spec = PRODUCTS[int(rng.integers(len(PRODUCTS)))]
        name, phone, province, city, street = recipient
        lines.append([
            f"SO{100000 + i}",
            name,
            phone,
            province,
            city,
            street,
            product,
            spec,
            round(float(rng.uniform(5, 200)), 2),
            int(rng.integers(1, 4)),
            "尽快发货" if rng.random() < 0.2 else "",
        ])
    return pd.DataFrame(lines, columns=HEADERS)


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a sample order workbook for shipsheet")
    parser.add_argument("output", type=Path, help="Output Excel file path")
    parser.add_argument("--rows", type=int, default=50, help="Number of order lines (default: 50)")
    parser.add_argument(
        "--duplicate-ratio", type=float, default=0.3, help="Share of lines reusing a recipient (default: 0.3)"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0.0 <= args.duplicate_ratio <= 1.0:
        print("Error: --duplicate-ratio must be between 0 and 1", file=sys.stderr)
        return 1

    df = generate_orders(args.rows, args.duplicate_ratio, args.seed)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(args.output, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="订单", index=False)

    print(f"Created Excel file: {args.output} ({len(df)} order lines)")
    print("\nMapping config for this layout:\n")
    print(SAMPLE_MAPPING)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
