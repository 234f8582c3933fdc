from __future__ import annotations

from dataclasses import dataclass

"""ConvertedRow / ConversionResult models.

ConvertedRow is the canonical shipping-order record produced by the row
converter. Its identity key (name, phone, address) is the sole criterion used
for duplicate detection; product fields never take part in grouping.
"""

__all__ = [
    "ConvertedRow",
    "ConversionResult",
    "IdentityKey",
]

IdentityKey = tuple[str, str, str]


@dataclass(frozen=True)
class ConvertedRow:
    """One normalized shipping order."""
    recipient_name: str = ""
    recipient_phone: str = ""
    delivery_address: str = ""
    product_name: str = ""
    product_spec: str = ""
    quantity: str = "1"  # 未マッピング時の既定数量
    remarks: str = ""
    group_id: int = 0  # 0 = not part of a duplicate group

    @property
    def identity_key(self) -> IdentityKey:
        return (self.recipient_name, self.recipient_phone, self.delivery_address)

    def has_identity(self) -> bool:
        """False when name, phone and address are all empty."""
        return any(self.identity_key)

    def export_values(self) -> list[str]:
        """The seven string fields in export column order."""
        return [
            self.recipient_name,
            self.recipient_phone,
            self.delivery_address,
            self.product_name,
            self.product_spec,
            self.quantity,
            self.remarks,
        ]


@dataclass(frozen=True)
class ConversionResult:
    """Rows of one conversion (or merge) plus duplicate statistics."""
    rows: list[ConvertedRow]
    total_rows: int
    has_duplicates: bool
    duplicate_count: int  # rows involved in any group of size >= 2

    @property
    def group_count(self) -> int:
        """Number of distinct duplicate groups."""
        return len({r.group_id for r in self.rows if r.group_id > 0})
