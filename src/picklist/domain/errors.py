"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class InvariantViolation(DomainError):
    """Internal logic produced a state that must never occur."""


def unknown_mapping_field(field: str, valid_fields: tuple[str, ...]) -> str:
    """Return message for a mapping key outside the field enumeration."""
    return f"Invalid mapping field '{field}'. Must be one of: {', '.join(valid_fields)}"


def order_lines_not_found(order_number: str, sku: str | None = None) -> str:
    """Return message when no loaded line matches a completion request."""
    if sku:
        return f"No loaded order line for order '{order_number}' with SKU '{sku}'"
    return f"No loaded order lines for order '{order_number}'"


def empty_group_key(index: int) -> str:
    """Return message for a grouping key that resolved to nothing."""
    return f"Grouping key for order line at position {index} is empty"
