"""Column mapping: logical order fields to sheet header text."""

import logging
from typing import Optional, Sequence

from picklist.database.base import Database
from picklist.domain.errors import ValidationError, unknown_mapping_field

logger = logging.getLogger(__name__)

ColumnMapping = dict[str, str]

# Fixed field enumeration; resolution always walks this order.
ORDER_FIELDS: tuple[str, ...] = (
    "orderNumber",
    "customerFirstName",
    "customerLastName",
    "sku",
    "quantity",
    "location",
    "buyerPostcode",
    "imageUrl",
    "remainingStock",
    "orderValue",
    "channelType",
    "channel",
    "width",
    "weight",
    "itemName",
    "shipFromLocation",
    "packageDimension",
    "notes",
    "fileDate",
    "orderDate",
)

# Resolved like any other field but not carried onto order lines.
PACKAGING_FIELDS = frozenset(
    {"imageUrl", "width", "weight", "shipFromLocation", "packageDimension"}
)

DEFAULT_COLUMN_MAPPING: ColumnMapping = {
    "orderNumber": "Order Number",
    "customerFirstName": "Customer First Name",
    "customerLastName": "Customer Last Name",
    "sku": "SKU",
    "quantity": "Quantity",
    "location": "Location",
    "buyerPostcode": "Buyer Postcode",
    "imageUrl": "Image URL",
    "remainingStock": "Remaining Stock",
    "orderValue": "Order Value",
    "channelType": "Channel Type",
    "channel": "Channel",
    "width": "Width",
    "weight": "Weight",
    "itemName": "Product Name",
    "shipFromLocation": "Ship From Location",
    "packageDimension": "Package Dimension",
    "notes": "Notes",
    "fileDate": "Downloaded Date",
    "orderDate": "created_at",
}


def _normalize_header(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def mapped_fields(mapping: ColumnMapping) -> list[str]:
    """Fields with a non-blank target header, in enumeration order."""
    return [f for f in ORDER_FIELDS if (mapping.get(f) or "").strip()]


def resolve_columns(header_row: Sequence[Optional[str]], mapping: ColumnMapping) -> dict[str, int]:
    """Resolve mapped fields to column indices in ``header_row``.

    Matching is case-insensitive on trimmed text and the first matching
    column wins. Fields whose header is missing are left out.

    Args:
        header_row: Header cells of the sheet
        mapping: Field key to expected header text

    Returns:
        Dict of field key to 0-based column index
    """
    normalized = [_normalize_header(h) for h in header_row]
    indices: dict[str, int] = {}

    for field_key in mapped_fields(mapping):
        target = _normalize_header(mapping[field_key])
        try:
            indices[field_key] = normalized.index(target)
        except ValueError:
            logger.warning("Column %r not found for field %r", mapping[field_key], field_key)
            continue
        logger.debug("Mapped %s to column %d (%s)", field_key, indices[field_key], mapping[field_key])

    return indices


def unmatched_fields(header_row: Sequence[Optional[str]], mapping: ColumnMapping) -> list[str]:
    """Mapped fields whose header text does not appear in ``header_row``."""
    normalized = set(_normalize_header(h) for h in header_row)
    return [f for f in mapped_fields(mapping) if _normalize_header(mapping[f]) not in normalized]


class ColumnMappingService:
    """Service for managing the stored column mapping."""

    def __init__(self, db: Database):
        """Initialize column mapping service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_mapping(self) -> ColumnMapping:
        """Get the stored mapping, or the default mapping if none is stored."""
        stored = self.db.get_column_mapping()
        if stored is None:
            return dict(DEFAULT_COLUMN_MAPPING)
        return dict(stored)

    def is_default(self) -> bool:
        return self.db.get_column_mapping() is None

    def set_field(self, field_key: str, header: str) -> ColumnMapping:
        """Map a field to a header, replacing any previous header.

        Raises:
            ValidationError: If the field key is unknown or the header is blank
        """
        self._check_field(field_key)
        if not header or not header.strip():
            raise ValidationError(f"Header for field '{field_key}' must not be blank")

        mapping = self.get_mapping()
        mapping[field_key] = header.strip()
        self.db.save_column_mapping(mapping)
        return mapping

    def clear_field(self, field_key: str) -> ColumnMapping:
        """Unmap a field. Unmapped fields contribute no data."""
        self._check_field(field_key)
        mapping = self.get_mapping()
        mapping[field_key] = ""
        self.db.save_column_mapping(mapping)
        return mapping

    def reset(self) -> None:
        """Forget the stored mapping and fall back to the default."""
        self.db.save_column_mapping(None)

    def _check_field(self, field_key: str) -> None:
        if field_key not in ORDER_FIELDS:
            raise ValidationError(unknown_mapping_field(field_key, ORDER_FIELDS))
