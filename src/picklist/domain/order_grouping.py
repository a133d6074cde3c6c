"""Group order lines into customer-level display groups.

Lines are grouped by:
1. Same real customer + same postcode (merged orders, any order numbers)
2. Same real customer + same real order number (multiple items)
Anything else stays on its own.
"""

import logging
from dataclasses import astuple, replace
from typing import Iterable

from picklist.domain.entities import (
    ByCustomerOrder,
    ByCustomerPostcode,
    GroupCounts,
    GroupFilter,
    GroupKey,
    OrderGroup,
    OrderLine,
    ProblemStatus,
    UniqueLine,
)
from picklist.domain.errors import InvariantViolation, empty_group_key

logger = logging.getLogger(__name__)

SYNTHETIC_CUSTOMER_PREFIX = "Customer-"
SYNTHETIC_ORDER_PREFIX = "Row-"


def has_real_customer(order: OrderLine) -> bool:
    name = order.customer_name.strip()
    return bool(name) and not name.startswith(SYNTHETIC_CUSTOMER_PREFIX)


def has_real_order_number(order: OrderLine) -> bool:
    number = order.order_number.strip()
    return bool(number) and not number.startswith(SYNTHETIC_ORDER_PREFIX)


def group_key(order: OrderLine, index: int) -> GroupKey:
    """Grouping key of the line at ``index`` of the input sequence."""
    postcode = (order.buyer_postcode or "").strip()

    if has_real_customer(order) and postcode:
        key: GroupKey = ByCustomerPostcode(order.customer_name.strip(), postcode)
    elif has_real_customer(order) and has_real_order_number(order):
        key = ByCustomerOrder(order.customer_name.strip(), order.order_number.strip())
    else:
        key = UniqueLine(index)

    if not isinstance(key, UniqueLine) and not all(astuple(key)):
        raise InvariantViolation(empty_group_key(index))
    return key


def _add_line(group: OrderGroup | None, order: OrderLine, index: int) -> OrderGroup:
    if group is None:
        group = OrderGroup(
            customer_name=order.customer_name,
            order_number=order.order_number,
            order_numbers=(),
            items=(),
            total_items=0,
            completed_items=0,
            buyer_postcode=order.buyer_postcode,
            original_index=index,
        )

    order_numbers = group.order_numbers
    if order.order_number not in order_numbers:
        order_numbers = order_numbers + (order.order_number,)

    return replace(
        group,
        order_numbers=order_numbers,
        items=group.items + (order,),
        total_items=group.total_items + order.quantity,
        completed_items=group.completed_items + (order.quantity if order.completed else 0),
    )


def _classify(group: OrderGroup) -> OrderGroup:
    distinct_orders = {item.order_number for item in group.items}
    if len(distinct_orders) > 1:
        return replace(group, is_merged_order=True, is_multiple_items=False)
    if len(group.items) > 1:
        return replace(group, is_merged_order=False, is_multiple_items=True)
    return replace(group, is_merged_order=False, is_multiple_items=False)


def group_orders(orders: Iterable[OrderLine]) -> list[OrderGroup]:
    """Group order lines for display.

    Items keep input order inside each group and groups are ordered by the
    position of their first line.

    Args:
        orders: Flat sequence of order lines

    Returns:
        List of classified order groups
    """
    groups: dict[GroupKey, OrderGroup] = {}
    count = 0
    for index, order in enumerate(orders):
        key = group_key(order, index)
        groups[key] = _add_line(groups.get(key), order, index)
        count += 1

    result = sorted((_classify(g) for g in groups.values()), key=lambda g: g.original_index)

    logger.info("Grouped %d order lines into %d display groups", count, len(result))
    for position, group in enumerate(result, start=1):
        if group.is_merged_order:
            logger.debug(
                "Group %d: %s (merged orders: %s) - %d items",
                position,
                group.customer_name,
                ", ".join(group.order_numbers),
                len(group.items),
            )
        elif group.is_multiple_items:
            logger.debug(
                "Group %d: %s (order %s) - %d items",
                position,
                group.customer_name,
                group.order_number,
                len(group.items),
            )

    return result


def matches_filter(group: OrderGroup, group_filter: GroupFilter) -> bool:
    """Whether a group passes every switch of ``group_filter``."""
    if group.is_completed and not group_filter.show_completed:
        return False
    if not group.is_completed and not group_filter.show_incomplete:
        return False
    if group.is_merged_order and not group_filter.show_merged_orders:
        return False
    if group.is_multiple_items and not group_filter.show_multiple_items:
        return False
    if group.is_single_item and not group_filter.show_single_items:
        return False

    has_problem = group.has_problem()
    if has_problem and not group_filter.show_with_problems:
        return False
    if not has_problem and not group_filter.show_without_problems:
        return False

    status_switches = {
        ProblemStatus.PENDING: group_filter.show_problems_pending,
        ProblemStatus.IN_PROGRESS: group_filter.show_problems_in_progress,
        ProblemStatus.ESCALATED: group_filter.show_problems_escalated,
        ProblemStatus.RESOLVED: group_filter.show_problems_resolved,
    }
    for status, shown in status_switches.items():
        if not shown and group.has_problem(status):
            return False

    return True


def filter_groups(groups: list[OrderGroup], group_filter: GroupFilter) -> list[OrderGroup]:
    """Groups passing ``group_filter``, in their original order."""
    return [g for g in groups if matches_filter(g, group_filter)]


def count_groups(groups: list[OrderGroup]) -> GroupCounts:
    """Count groups per filter switch.

    Pass the unfiltered grouping so the counts show what each switch
    would add back.
    """
    completed = sum(1 for g in groups if g.is_completed)
    with_problems = sum(1 for g in groups if g.has_problem())
    return GroupCounts(
        total=len(groups),
        completed=completed,
        incomplete=len(groups) - completed,
        merged_orders=sum(1 for g in groups if g.is_merged_order),
        multiple_items=sum(1 for g in groups if g.is_multiple_items),
        single_items=sum(1 for g in groups if g.is_single_item),
        with_problems=with_problems,
        without_problems=len(groups) - with_problems,
        pending=sum(1 for g in groups if g.has_problem(ProblemStatus.PENDING)),
        in_progress=sum(1 for g in groups if g.has_problem(ProblemStatus.IN_PROGRESS)),
        escalated=sum(1 for g in groups if g.has_problem(ProblemStatus.ESCALATED)),
        resolved=sum(1 for g in groups if g.has_problem(ProblemStatus.RESOLVED)),
    )
