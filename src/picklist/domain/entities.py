"""Domain model entities for picklist.

These are pure data classes representing business concepts, independent of
database schema and of the sheet layout they were read from.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class ProblemStatus(str, Enum):
    """Status of a problem reported against an order line."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    ESCALATED = "escalated"


@dataclass(frozen=True)
class OrderLine:
    """One SKU line of an order, as read from a sheet row."""

    row_index: int
    order_number: str
    customer_name: str
    sku: str
    quantity: int
    location: str
    file_date: datetime
    buyer_postcode: Optional[str] = None
    remaining_stock: Optional[int] = None
    order_value: Optional[Decimal] = None
    channel_type: Optional[str] = None
    channel: Optional[str] = None
    item_name: Optional[str] = None
    notes: Optional[str] = None
    completed: bool = False
    problem_status: Optional[ProblemStatus] = None


class SkipReason(str, Enum):
    """Why a source row produced no order line."""

    EMPTY_ROW = "empty_row"
    MISSING_DATE = "missing_date"
    UNPARSEABLE_DATE = "unparseable_date"
    DATE_MISMATCH = "date_mismatch"
    MISSING_SKU = "missing_sku"


@dataclass(frozen=True)
class RowDiagnostic:
    """A skipped source row. ``row_index`` is the sheet row number."""

    row_index: int
    reason: SkipReason
    detail: str = ""


@dataclass(frozen=True)
class ExtractionResult:
    """Order lines extracted from a sheet plus what was left out."""

    orders: tuple[OrderLine, ...]
    diagnostics: tuple[RowDiagnostic, ...]
    total_rows: int
    unmatched_fields: tuple[str, ...] = ()

    def skipped(self, *reasons: SkipReason) -> int:
        """Count skipped rows, optionally restricted to some reasons."""
        if not reasons:
            return len(self.diagnostics)
        return sum(1 for d in self.diagnostics if d.reason in reasons)

    @property
    def skipped_missing_sku(self) -> int:
        return self.skipped(SkipReason.MISSING_SKU)

    @property
    def skipped_by_date(self) -> int:
        return self.skipped(
            SkipReason.MISSING_DATE, SkipReason.UNPARSEABLE_DATE, SkipReason.DATE_MISMATCH
        )


@dataclass(frozen=True)
class ByCustomerPostcode:
    """Lines of one customer shipping to one postcode."""

    customer_name: str
    postcode: str


@dataclass(frozen=True)
class ByCustomerOrder:
    """Lines of one customer under one order number."""

    customer_name: str
    order_number: str


@dataclass(frozen=True)
class UniqueLine:
    """A line without reliable identity; never grouped with another."""

    index: int


GroupKey = Union[ByCustomerPostcode, ByCustomerOrder, UniqueLine]


@dataclass(frozen=True)
class OrderGroup:
    """Customer-level display group of order lines."""

    customer_name: str
    order_number: str
    order_numbers: tuple[str, ...]
    items: tuple[OrderLine, ...]
    total_items: int
    completed_items: int
    buyer_postcode: Optional[str]
    original_index: int
    is_merged_order: bool = False
    is_multiple_items: bool = False

    @property
    def is_single_item(self) -> bool:
        return not self.is_merged_order and not self.is_multiple_items

    @property
    def is_completed(self) -> bool:
        return self.total_items > 0 and self.completed_items == self.total_items

    def has_problem(self, status: Optional[ProblemStatus] = None) -> bool:
        """Whether any line has a problem (of the given status, if any)."""
        if status is None:
            return any(item.problem_status is not None for item in self.items)
        return any(item.problem_status == status for item in self.items)


@dataclass(frozen=True)
class GroupFilter:
    """Which order groups to show. A group is hidden if any applicable switch is off."""

    show_completed: bool = True
    show_incomplete: bool = True
    show_merged_orders: bool = True
    show_multiple_items: bool = True
    show_single_items: bool = True
    show_with_problems: bool = True
    show_without_problems: bool = True
    show_problems_pending: bool = True
    show_problems_in_progress: bool = True
    show_problems_escalated: bool = True
    show_problems_resolved: bool = True


@dataclass(frozen=True)
class GroupCounts:
    """Number of groups matching each filter switch."""

    total: int
    completed: int
    incomplete: int
    merged_orders: int
    multiple_items: int
    single_items: int
    with_problems: int
    without_problems: int
    pending: int
    in_progress: int
    escalated: int
    resolved: int


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a sheet into the stored order collection."""

    extraction: ExtractionResult
    new_orders: tuple[OrderLine, ...]
    total_orders: int
    merged: bool
