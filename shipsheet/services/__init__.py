"""Conversion services: operation engine, row converter, duplicates, session."""

from .converter import DEFAULT_MAPPING, read_and_convert, read_and_convert_with_mapping
from .duplicates import group_duplicates, merge_duplicates, merge_result
from .operations import apply_operation
from .session import ConversionSession

__all__ = [
    "DEFAULT_MAPPING",
    "ConversionSession",
    "apply_operation",
    "group_duplicates",
    "merge_duplicates",
    "merge_result",
    "read_and_convert",
    "read_and_convert_with_mapping",
]
