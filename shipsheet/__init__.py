"""shipsheet: spreadsheet -> shipping-order converter with duplicate merging."""

__version__ = "0.1.0"
