"""Utility functions for picklist."""

from picklist.utils.date_parser import parse_date, to_canonical, to_display
from picklist.utils.value_parser import parse_order_value, parse_quantity
from picklist.utils.table_reader import read_table

__all__ = [
    "parse_date",
    "to_canonical",
    "to_display",
    "parse_order_value",
    "parse_quantity",
    "read_table",
]
