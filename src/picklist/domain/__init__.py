"""Domain layer for picklist application.

Services live in their own modules (``order_loading``, ``column_mapping``)
and are imported from there; the database layer imports ``entities``.
"""

from picklist.domain.entities import (
    GroupFilter,
    OrderGroup,
    OrderLine,
    ProblemStatus,
)
from picklist.domain.errors import DomainError, ValidationError

__all__ = [
    "GroupFilter",
    "OrderGroup",
    "OrderLine",
    "ProblemStatus",
    "DomainError",
    "ValidationError",
]
