"""Tests for detecting new order lines."""

from picklist.domain.order_diff import diff_key, diff_new, merge_new, selection_key


def test_diff_against_itself_is_empty(make_order):
    """Nothing is new compared with itself."""
    existing = [make_order(2), make_order(3), make_order(4)]
    assert diff_new(existing, existing) == []


def test_diff_against_nothing_returns_incoming(make_order):
    """Everything is new compared with an empty load, in order."""
    incoming = [make_order(4), make_order(2), make_order(3)]
    assert diff_new([], incoming) == incoming


def test_diff_preserves_incoming_order(make_order):
    """Only unseen lines are returned, in incoming order."""
    existing = [make_order(3)]
    incoming = [make_order(5), make_order(3), make_order(2)]

    assert [o.row_index for o in diff_new(existing, incoming)] == [5, 2]


def test_diff_ignores_row_position(make_order):
    """A line that moved rows in the sheet is not new."""
    existing = [make_order(2, order_number="1001", sku="MUG")]
    incoming = [make_order(9, order_number="1001", sku="MUG")]

    assert diff_new(existing, incoming) == []


def test_diff_does_not_mutate_inputs(make_order):
    """Inputs are left untouched."""
    existing = [make_order(2)]
    incoming = [make_order(2), make_order(3)]
    diff_new(existing, incoming)

    assert len(existing) == 1
    assert len(incoming) == 2


def test_diff_key_uses_sku():
    """The key joins order number and SKU."""

    class Line:
        order_number = "1001"
        sku = "MUG"
        customer_name = "Jane Doe"

    assert diff_key(Line()) == "1001-MUG"


def test_diff_key_falls_back_to_customer():
    """Without a SKU the customer name stands in."""

    class Line:
        order_number = "Row-4"
        sku = ""
        customer_name = "Jane Doe"

    assert diff_key(Line()) == "Row-4-Jane Doe"


def test_diff_key_known_collision(make_order):
    """Same order number and SKU for different customers count as one line.

    The key is coarse on purpose; this documents the accepted collision.
    """
    existing = [make_order(2, order_number="1001", sku="MUG", customer_name="Jane Doe")]
    incoming = [make_order(3, order_number="1001", sku="MUG", customer_name="John Smith")]

    assert diff_new(existing, incoming) == []


def test_merge_new(make_order):
    """Merging appends only new lines."""
    existing = [make_order(2), make_order(3)]
    incoming = [make_order(3), make_order(4)]

    merged, new_orders = merge_new(existing, incoming)

    assert [o.row_index for o in merged] == [2, 3, 4]
    assert [o.row_index for o in new_orders] == [4]
    assert len(existing) == 2


def test_selection_key(make_order):
    """Selection identity is order number, SKU and customer."""
    order = make_order(2, order_number="1001", sku="MUG", customer_name="Jane Doe")
    assert selection_key(order) == ("1001", "MUG", "Jane Doe")
