"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, keeping the domain entities free
of storage details.
"""

from picklist.domain import entities as domain
from picklist.database.models import OrderLineRecord as ORMOrderLine


def order_line_to_domain(orm_line: ORMOrderLine) -> domain.OrderLine:
    """Convert SQLAlchemy OrderLineRecord model to domain OrderLine entity."""
    return domain.OrderLine(
        row_index=orm_line.row_index,
        order_number=orm_line.order_number,
        customer_name=orm_line.customer_name,
        sku=orm_line.sku,
        quantity=orm_line.quantity,
        location=orm_line.location,
        file_date=orm_line.file_date,
        buyer_postcode=orm_line.buyer_postcode,
        remaining_stock=orm_line.remaining_stock,
        order_value=orm_line.order_value,
        channel_type=orm_line.channel_type,
        channel=orm_line.channel,
        item_name=orm_line.item_name,
        notes=orm_line.notes,
        completed=orm_line.completed,
        problem_status=(
            domain.ProblemStatus(orm_line.problem_status) if orm_line.problem_status else None
        ),
    )


def order_line_to_orm(line: domain.OrderLine, position: int) -> ORMOrderLine:
    """Convert domain OrderLine entity to a new SQLAlchemy OrderLineRecord."""
    return ORMOrderLine(
        position=position,
        row_index=line.row_index,
        order_number=line.order_number,
        customer_name=line.customer_name,
        sku=line.sku,
        quantity=line.quantity,
        location=line.location,
        buyer_postcode=line.buyer_postcode,
        remaining_stock=line.remaining_stock,
        order_value=line.order_value,
        channel_type=line.channel_type,
        channel=line.channel,
        item_name=line.item_name,
        notes=line.notes,
        file_date=line.file_date,
        completed=line.completed,
        problem_status=line.problem_status.value if line.problem_status else None,
    )
