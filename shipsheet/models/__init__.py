"""Domain models for the spreadsheet -> shipping-order converter.

Column discovery, mapping configuration and converted order records.
"""

from .column_info import ColumnInfo
from .converted_row import ConversionResult, ConvertedRow, IdentityKey
from .error_record import ErrorRecord
from .mapping import ColumnMapping, MappingTable, Operation, OutputField, build_mapping_table

__all__ = [
    # Source discovery
    "ColumnInfo",
    # Mapping configuration
    "ColumnMapping",
    "MappingTable",
    "Operation",
    "OutputField",
    "build_mapping_table",
    # Converted records
    "ConvertedRow",
    "ConversionResult",
    "IdentityKey",
    # Error log
    "ErrorRecord",
]
