"""Numeric value parsing utilities for sheet cells."""

from decimal import Decimal, InvalidOperation
from typing import Optional
import re

_LEADING_INT = re.compile(r"^[+-]?\d+")
_LEADING_NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)")


def parse_int_prefix(value_str: str) -> Optional[int]:
    """Parse the leading integer of a string.

    "12" -> 12, "3 units" -> 3, "2.7" -> 2, "abc" -> None
    """
    if not value_str:
        return None
    match = _LEADING_INT.match(value_str.strip())
    if match is None:
        return None
    return int(match.group(0))


def parse_quantity(quantity_str: str) -> int:
    """Parse a quantity cell.

    Empty, unparseable, zero or negative quantities become 1.
    """
    quantity = parse_int_prefix(quantity_str)
    if quantity is None or quantity < 1:
        return 1
    return quantity


def parse_order_value(value_str: str) -> Optional[Decimal]:
    """Parse a currency-formatted order value.

    Handles formats such as:
    - "£1,234.50"
    - "$ 12.00"
    - "-€3.20"
    - "12.50 GBP"

    Args:
        value_str: Order value text

    Returns:
        Decimal value, or None if nothing numeric is left (e.g. "N/A")
    """
    if not value_str:
        return None

    # Remove currency symbols
    cleaned = re.sub(r"[£$€¥₹₽¢]", "", value_str)

    # Remove thousands separators and whitespace
    cleaned = re.sub(r"[,\s]", "", cleaned)

    # Keep digits, dots and a leading minus
    cleaned = re.sub(r"[^\d.-]", "", cleaned)
    if cleaned.startswith("-"):
        cleaned = "-" + cleaned[1:].replace("-", "")
    else:
        cleaned = cleaned.replace("-", "")

    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return None

    try:
        return Decimal(match.group(0))
    except InvalidOperation:
        return None
