from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

"""Column mapping models.

A mapping table associates each output field with the source columns it is
derived from and the operation used to combine them. Field identifiers form a
closed set; unknown names are rejected when the table is built.
"""

__all__ = [
    "OutputField",
    "Operation",
    "ColumnMapping",
    "MappingTable",
    "build_mapping_table",
]

logger = logging.getLogger(__name__)


class OutputField(str, Enum):
    """Output fields of a shipping-order record, in export column order."""
    RECIPIENT_NAME = "recipient_name"
    RECIPIENT_PHONE = "recipient_phone"
    DELIVERY_ADDRESS = "delivery_address"
    PRODUCT_NAME = "product_name"
    PRODUCT_SPEC = "product_spec"
    QUANTITY = "quantity"
    REMARKS = "remarks"


class Operation(str, Enum):
    """How the decoded values of several source columns are combined."""
    CONCAT = "concat"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @classmethod
    def from_name(cls, name: str | Operation) -> Operation:
        """Resolve an operation name.

        Unknown names fall back to CONCAT (with a warning) instead of failing.
        """
        if isinstance(name, Operation):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            logger.warning(f"unknown operation '{name}', falling back to concat")
            return cls.CONCAT


@dataclass(frozen=True)
class ColumnMapping:
    """Source columns (0-based, order preserved) and the combining operation."""
    source_indices: tuple[int, ...]
    operation: Operation = Operation.CONCAT

    @staticmethod
    def create(source_indices: Iterable[int], operation: str | Operation = Operation.CONCAT) -> ColumnMapping:
        indices = tuple(int(i) for i in source_indices)
        negative = [i for i in indices if i < 0]
        if negative:
            raise ValueError(f"source column indices must be non-negative: {negative}")
        return ColumnMapping(source_indices=indices, operation=Operation.from_name(operation))


MappingTable = dict[OutputField, ColumnMapping]


def build_mapping_table(raw: Mapping[str | OutputField, ColumnMapping]) -> MappingTable:
    """Build a MappingTable keyed by OutputField.

    Raises:
        ValueError: if a key is not one of the OutputField names
    """
    table: MappingTable = {}
    for key, mapping in raw.items():
        try:
            field = key if isinstance(key, OutputField) else OutputField(key)
        except ValueError:
            allowed = ", ".join(f.value for f in OutputField)
            raise ValueError(f"unknown output field '{key}' (expected one of: {allowed})") from None
        table[field] = mapping
    return table
