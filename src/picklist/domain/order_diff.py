"""Detect order lines that are new compared with a previous load."""

from typing import Sequence

from picklist.domain.entities import OrderLine


def diff_key(order: OrderLine) -> str:
    """Key used to decide whether a line was already loaded.

    Two customers without a SKU under the same order number share a key.
    """
    return f"{order.order_number}-{order.sku or order.customer_name}"


def diff_new(existing: Sequence[OrderLine], incoming: Sequence[OrderLine]) -> list[OrderLine]:
    """Lines of ``incoming`` whose key is not present in ``existing``, in order."""
    existing_keys = {diff_key(order) for order in existing}
    return [order for order in incoming if diff_key(order) not in existing_keys]


def merge_new(
    existing: Sequence[OrderLine], incoming: Sequence[OrderLine]
) -> tuple[list[OrderLine], list[OrderLine]]:
    """Append the new lines of ``incoming`` to ``existing``.

    Returns:
        Tuple of (merged collection, new lines)
    """
    new_orders = diff_new(existing, incoming)
    return list(existing) + new_orders, new_orders


def selection_key(order: OrderLine) -> tuple[str, str, str]:
    """Identity the display layer uses to map a selection back to a line."""
    return (order.order_number, order.sku, order.customer_name)
