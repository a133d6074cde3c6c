"""Order extraction: sheet rows to order lines."""

import logging
from datetime import UTC, datetime
from typing import Optional, Sequence

from picklist.domain.column_mapping import ColumnMapping, resolve_columns, unmatched_fields
from picklist.domain.entities import ExtractionResult, OrderLine, RowDiagnostic, SkipReason
from picklist.utils.date_parser import sort_dates, to_canonical
from picklist.utils.value_parser import parse_int_prefix, parse_order_value, parse_quantity

logger = logging.getLogger(__name__)

# Sheet row number of the first data row (the header is row 1).
FIRST_DATA_ROW = 2


def _cell(row: Sequence[Optional[str]], columns: dict[str, int], field_key: str) -> str:
    """Trimmed text of a mapped field, or "" if unmapped or out of range."""
    index = columns.get(field_key)
    if index is None or index >= len(row):
        return ""
    value = row[index]
    return str(value).strip() if value is not None else ""


def _row_date(row: Sequence[Optional[str]], columns: dict[str, int]) -> str:
    return _cell(row, columns, "fileDate") or _cell(row, columns, "orderDate")


def _is_empty(row: Optional[Sequence[Optional[str]]]) -> bool:
    return not row or all(cell is None or not str(cell).strip() for cell in row)


def extract_orders(
    header_row: Sequence[Optional[str]],
    data_rows: Sequence[Optional[Sequence[Optional[str]]]],
    mapping: ColumnMapping,
    target_date: Optional[str] = None,
    extracted_at: Optional[datetime] = None,
) -> ExtractionResult:
    """Extract order lines from sheet rows.

    Rows are processed in order. A row is skipped (and reported in the
    result diagnostics) when it is empty, when ``target_date`` is given and
    the row's date is missing, unparseable or different, or when it has no
    SKU. Skipping never aborts the batch.

    Args:
        header_row: Header cells of the sheet
        data_rows: Data rows, aligned with ``header_row``
        mapping: Field key to header text
        target_date: Optional date to keep; any format ``to_canonical`` accepts
        extracted_at: Timestamp stamped on every line (defaults to now)

    Returns:
        ExtractionResult with order lines in row order
    """
    columns = resolve_columns(header_row, mapping)
    file_date = extracted_at or datetime.now(UTC)
    target = to_canonical(target_date) if target_date else None
    if target_date and target is None:
        logger.warning("Target date %r cannot be parsed; no rows will match", target_date)

    orders: list[OrderLine] = []
    diagnostics: list[RowDiagnostic] = []

    def skip(row_index: int, reason: SkipReason, detail: str = "") -> None:
        diagnostics.append(RowDiagnostic(row_index=row_index, reason=reason, detail=detail))
        logger.debug("Skipping row %d: %s %s", row_index, reason.value, detail)

    for position, row in enumerate(data_rows, start=1):
        row_index = position + FIRST_DATA_ROW - 1

        if _is_empty(row):
            skip(row_index, SkipReason.EMPTY_ROW)
            continue

        if target_date:
            raw_date = _row_date(row, columns)
            if not raw_date:
                skip(row_index, SkipReason.MISSING_DATE)
                continue
            row_date = to_canonical(raw_date)
            if row_date is None:
                skip(row_index, SkipReason.UNPARSEABLE_DATE, raw_date)
                continue
            if row_date != target:
                skip(row_index, SkipReason.DATE_MISMATCH, row_date)
                continue

        sku = _cell(row, columns, "sku")
        if not sku:
            skip(row_index, SkipReason.MISSING_SKU)
            continue

        first_name = _cell(row, columns, "customerFirstName")
        last_name = _cell(row, columns, "customerLastName")
        customer_name = f"{first_name} {last_name}".strip() or f"Customer-{position}"
        order_number = _cell(row, columns, "orderNumber") or f"Row-{position}"
        postcode = _cell(row, columns, "buyerPostcode")

        orders.append(
            OrderLine(
                row_index=row_index,
                order_number=order_number,
                customer_name=customer_name,
                sku=sku,
                quantity=parse_quantity(_cell(row, columns, "quantity")),
                location=_cell(row, columns, "location") or "Unknown",
                file_date=file_date,
                buyer_postcode="".join(postcode.split()) or None,
                remaining_stock=parse_int_prefix(_cell(row, columns, "remainingStock")),
                order_value=parse_order_value(_cell(row, columns, "orderValue")),
                channel_type=_cell(row, columns, "channelType") or None,
                channel=_cell(row, columns, "channel") or None,
                item_name=_cell(row, columns, "itemName") or None,
                notes=_cell(row, columns, "notes") or None,
            )
        )

    result = ExtractionResult(
        orders=tuple(orders),
        diagnostics=tuple(diagnostics),
        total_rows=len(data_rows),
        unmatched_fields=tuple(unmatched_fields(header_row, mapping)),
    )

    logger.info(
        "Extracted %d order lines from %d rows (%d skipped by date, %d missing SKU)",
        len(orders),
        result.total_rows,
        result.skipped_by_date,
        result.skipped_missing_sku,
    )
    if not orders and target and result.skipped_by_date:
        logger.warning("No rows matched target date %s; check the date column mapping", target)

    return result


def list_available_dates(
    header_row: Sequence[Optional[str]],
    data_rows: Sequence[Optional[Sequence[Optional[str]]]],
    mapping: ColumnMapping,
) -> list[str]:
    """Distinct canonical row dates, newest first.

    Uses the same date column as extraction (fileDate, then orderDate).
    Dates that cannot be parsed are left out.
    """
    columns = resolve_columns(header_row, mapping)
    dates: set[str] = set()

    for row in data_rows:
        if _is_empty(row):
            continue
        raw_date = _row_date(row, columns)
        if not raw_date:
            continue
        canonical = to_canonical(raw_date)
        if canonical is None:
            logger.warning("Could not parse date: %r", raw_date)
            continue
        dates.add(canonical)

    return sort_dates(sorted(dates), descending=True)
