"""Tests for grouping order lines into display groups."""

import pytest

from picklist.domain.entities import (
    ByCustomerOrder,
    ByCustomerPostcode,
    GroupFilter,
    ProblemStatus,
    UniqueLine,
)
from picklist.domain.errors import InvariantViolation
from picklist.domain.order_grouping import (
    count_groups,
    filter_groups,
    group_key,
    group_orders,
)


@pytest.fixture
def mixed_orders(make_order):
    """Merged, multi-item and single-item orders interleaved."""
    return [
        make_order(2, order_number="1001", customer_name="Jane Doe", buyer_postcode="AB12CD", sku="A", quantity=2),
        make_order(3, order_number="1003", customer_name="John Smith", sku="C"),
        make_order(4, order_number="Row-3", customer_name="Customer-3", sku="E"),
        make_order(5, order_number="1002", customer_name="Jane Doe", buyer_postcode="AB12CD", sku="B"),
        make_order(6, order_number="1003", customer_name="John Smith", sku="D", quantity=3),
        make_order(7, order_number="1004", customer_name="Amy Lee", sku="F"),
    ]


def test_merged_order_example(make_order):
    """Same customer and postcode merge; synthetic customers never group."""
    orders = [
        make_order(2, order_number="1001", customer_name="Jane Doe", buyer_postcode="AB12CD", sku="MUG", quantity=2),
        make_order(3, order_number="1002", customer_name="Jane Doe", buyer_postcode="AB12CD", sku="CUP", quantity=3),
        make_order(4, order_number="Row-3", customer_name="Customer-3", sku="MUG"),
    ]

    groups = group_orders(orders)

    assert len(groups) == 2
    merged, single = groups
    assert merged.is_merged_order is True
    assert merged.is_multiple_items is False
    assert merged.total_items == 5
    assert merged.order_numbers == ("1001", "1002")
    assert single.is_single_item
    assert single.items == (orders[2],)


def test_group_order_follows_first_appearance(mixed_orders):
    """Groups are ordered by their first line; items keep input order."""
    groups = group_orders(mixed_orders)

    assert [g.customer_name for g in groups] == ["Jane Doe", "John Smith", "Customer-3", "Amy Lee"]
    assert [g.original_index for g in groups] == [0, 1, 2, 5]
    assert [i.sku for i in groups[0].items] == ["A", "B"]
    assert [i.sku for i in groups[1].items] == ["C", "D"]


def test_group_classification(mixed_orders):
    """Merged and multi-item flags are mutually exclusive."""
    jane, john, synthetic, amy = group_orders(mixed_orders)

    assert jane.is_merged_order and not jane.is_multiple_items
    assert john.is_multiple_items and not john.is_merged_order
    assert john.order_numbers == ("1003",)
    assert john.total_items == 4
    assert synthetic.is_single_item
    assert amy.is_single_item


def test_same_order_number_without_real_customer_not_grouped(make_order):
    """Lines with synthetic customers stay apart even under one order number."""
    orders = [
        make_order(2, order_number="1001", customer_name="Customer-1"),
        make_order(3, order_number="1001", customer_name="Customer-2"),
    ]

    assert len(group_orders(orders)) == 2


def test_synthetic_order_number_not_grouped(make_order):
    """A real customer with synthetic order numbers and no postcode stays apart."""
    orders = [
        make_order(2, order_number="Row-1", customer_name="Jane Doe"),
        make_order(3, order_number="Row-2", customer_name="Jane Doe"),
    ]

    groups = group_orders(orders)
    assert len(groups) == 2
    assert all(g.is_single_item for g in groups)


def test_postcode_takes_priority_over_order_number(make_order):
    """Postcode grouping applies even when order numbers are synthetic."""
    orders = [
        make_order(2, order_number="Row-1", customer_name="Jane Doe", buyer_postcode="AB12CD"),
        make_order(3, order_number="Row-2", customer_name="Jane Doe", buyer_postcode="AB12CD"),
    ]

    (group,) = group_orders(orders)
    assert group.is_merged_order


def test_delimiters_in_names_do_not_collide(make_order):
    """Tagged keys keep "A_B" + "C" apart from "A" + "B_C"."""
    orders = [
        make_order(2, order_number="1", customer_name="Ann_Lee", buyer_postcode="X1"),
        make_order(3, order_number="2", customer_name="Ann", buyer_postcode="Lee_X1"),
    ]

    assert len(group_orders(orders)) == 2


def test_completed_items(make_order):
    """Completed quantity only counts completed lines."""
    orders = [
        make_order(2, order_number="1001", customer_name="Jane Doe", quantity=2, completed=True),
        make_order(3, order_number="1001", customer_name="Jane Doe", sku="X", quantity=3),
    ]

    (group,) = group_orders(orders)
    assert (group.completed_items, group.total_items) == (2, 5)
    assert not group.is_completed


def test_group_key_variants(make_order):
    """Each priority tier yields its own key type."""
    assert group_key(
        make_order(2, customer_name=" Jane Doe ", buyer_postcode="AB12CD"), 0
    ) == ByCustomerPostcode("Jane Doe", "AB12CD")
    assert group_key(make_order(2, order_number="1001", customer_name="Jane Doe"), 0) == ByCustomerOrder(
        "Jane Doe", "1001"
    )
    assert group_key(make_order(2, customer_name="Customer-1", buyer_postcode="AB12CD"), 7) == UniqueLine(7)
    assert group_key(make_order(2, customer_name="  "), 3) == UniqueLine(3)


def test_group_key_blank_postcode_falls_through(make_order):
    """A whitespace postcode does not count as a postcode."""
    key = group_key(make_order(2, order_number="1001", customer_name="Jane Doe", buyer_postcode="  "), 0)
    assert key == ByCustomerOrder("Jane Doe", "1001")


def test_group_key_invariant(make_order, monkeypatch):
    """An empty key component is a programming error."""
    from picklist.domain import order_grouping

    monkeypatch.setattr(order_grouping, "has_real_order_number", lambda order: True)
    with pytest.raises(InvariantViolation):
        group_key(make_order(2, order_number="  ", customer_name="Jane Doe"), 0)


def test_group_empty():
    """No lines, no groups."""
    assert group_orders([]) == []


def _with_status(make_order, row_index, status, **kwargs):
    return make_order(row_index, problem_status=status, **kwargs)


@pytest.fixture
def status_orders(make_order):
    """Groups with assorted completion and problem states."""
    return [
        make_order(2, order_number="1", customer_name="Done Customer", completed=True),
        _with_status(make_order, 3, ProblemStatus.PENDING, order_number="2", customer_name="Pending Customer"),
        _with_status(make_order, 4, ProblemStatus.ESCALATED, order_number="3", customer_name="Escalated Customer"),
        make_order(5, order_number="3", customer_name="Escalated Customer", sku="Z"),
        _with_status(make_order, 6, ProblemStatus.RESOLVED, order_number="4", customer_name="Resolved Customer"),
    ]


def test_filter_default_shows_everything(status_orders):
    """The default filter hides nothing."""
    groups = group_orders(status_orders)
    assert filter_groups(groups, GroupFilter()) == groups


def test_filter_completion(status_orders):
    """Completion switches hide complete or incomplete groups."""
    groups = group_orders(status_orders)

    visible = filter_groups(groups, GroupFilter(show_completed=False))
    assert "Done Customer" not in [g.customer_name for g in visible]

    visible = filter_groups(groups, GroupFilter(show_incomplete=False))
    assert [g.customer_name for g in visible] == ["Done Customer"]


def test_filter_classification(status_orders):
    """Classification switches hide their kind of group."""
    groups = group_orders(status_orders)

    visible = filter_groups(groups, GroupFilter(show_single_items=False))
    assert [g.customer_name for g in visible] == ["Escalated Customer"]

    visible = filter_groups(groups, GroupFilter(show_multiple_items=False))
    assert "Escalated Customer" not in [g.customer_name for g in visible]


def test_filter_problem_presence(status_orders):
    """Problem presence is decided by any item in the group."""
    groups = group_orders(status_orders)

    visible = filter_groups(groups, GroupFilter(show_without_problems=False))
    assert [g.customer_name for g in visible] == [
        "Pending Customer",
        "Escalated Customer",
        "Resolved Customer",
    ]

    visible = filter_groups(groups, GroupFilter(show_with_problems=False))
    assert [g.customer_name for g in visible] == ["Done Customer"]


def test_filter_problem_status(status_orders):
    """Status switches hide groups with an item in that status."""
    groups = group_orders(status_orders)

    visible = filter_groups(
        groups, GroupFilter(show_problems_escalated=False, show_problems_resolved=False)
    )
    assert [g.customer_name for g in visible] == ["Done Customer", "Pending Customer"]


def test_filter_axes_combine(status_orders):
    """Switches on different axes all have to pass."""
    groups = group_orders(status_orders)

    visible = filter_groups(
        groups, GroupFilter(show_without_problems=False, show_multiple_items=False)
    )
    assert [g.customer_name for g in visible] == ["Pending Customer", "Resolved Customer"]


def test_counts_on_full_grouping(status_orders):
    """Counts describe the unfiltered grouping."""
    groups = group_orders(status_orders)
    counts = count_groups(groups)

    assert counts.total == 4
    assert counts.completed == 1
    assert counts.incomplete == 3
    assert counts.multiple_items == 1
    assert counts.merged_orders == 0
    assert counts.single_items == 3
    assert counts.with_problems == 3
    assert counts.without_problems == 1
    assert (counts.pending, counts.in_progress, counts.escalated, counts.resolved) == (1, 0, 1, 1)


def test_counts_unchanged_by_filtering(status_orders):
    """Filtering never changes the counts of the grouping it came from."""
    groups = group_orders(status_orders)
    before = count_groups(groups)
    filter_groups(groups, GroupFilter(show_completed=False, show_with_problems=False))

    assert count_groups(groups) == before


def test_zero_quantity_group_is_not_completed(make_order):
    """A group is only complete when it has items to pick."""
    from dataclasses import replace

    (group,) = group_orders([make_order(2, completed=True)])
    assert group.is_completed
    assert not replace(group, total_items=0, completed_items=0).is_completed
