"""Order loading domain service."""

import logging
from datetime import UTC, datetime
from typing import Optional

from picklist.database.base import Database
from picklist.domain.column_mapping import ColumnMappingService
from picklist.domain.entities import ExtractionResult, LoadResult, OrderLine, ProblemStatus
from picklist.domain.errors import NotFoundError, order_lines_not_found
from picklist.domain.order_diff import diff_new, merge_new
from picklist.domain.order_extraction import extract_orders, list_available_dates
from picklist.utils.date_parser import to_canonical
from picklist.utils.table_reader import read_table, split_table

logger = logging.getLogger(__name__)


class OrderLoadService:
    """Service for loading sheet exports into the stored order collection."""

    def __init__(self, db: Database):
        """Initialize order load service.

        Args:
            db: Database instance
        """
        self.db = db
        self.mapping_service = ColumnMappingService(db)

    def extract(
        self, csv_file_path: str, target_date: Optional[str] = None
    ) -> ExtractionResult:
        """Read a sheet export and extract order lines with the stored mapping.

        Raises:
            FileNotFoundError: If CSV file doesn't exist
        """
        header_row, data_rows = split_table(read_table(csv_file_path))
        if not data_rows:
            logger.warning("No data rows found in %s", csv_file_path)
        return extract_orders(
            header_row, data_rows, self.mapping_service.get_mapping(), target_date=target_date
        )

    def available_dates(self, csv_file_path: str) -> list[str]:
        """Distinct canonical dates present in a sheet export, newest first."""
        header_row, data_rows = split_table(read_table(csv_file_path))
        return list_available_dates(header_row, data_rows, self.mapping_service.get_mapping())

    def load(
        self, csv_file_path: str, target_date: Optional[str] = None, merge: bool = False
    ) -> LoadResult:
        """Load order lines from a sheet export.

        Args:
            csv_file_path: Path to CSV file
            target_date: Optional date to keep
            merge: Append only new lines to the stored collection instead of
                replacing it

        Returns:
            LoadResult. ``new_orders`` is every extracted line when replacing.
        """
        extraction = self.extract(csv_file_path, target_date=target_date)

        if merge:
            existing = self.db.list_orders()
            merged, new_orders = merge_new(existing, extraction.orders)
            self.db.append_orders(new_orders)
            total = len(merged)
            logger.info("Merged %d new order lines into %d existing", len(new_orders), len(existing))
        else:
            new_orders = list(extraction.orders)
            self.db.replace_orders(new_orders)
            total = len(new_orders)
            logger.info("Replaced loaded orders with %d order lines", total)

        self.db.save_selected_date(to_canonical(target_date) if target_date else None)
        self.db.record_sync(datetime.now(UTC))

        return LoadResult(
            extraction=extraction,
            new_orders=tuple(new_orders),
            total_orders=total,
            merged=merge,
        )

    def check_new(self, csv_file_path: str, target_date: Optional[str] = None) -> list[OrderLine]:
        """Lines of a sheet export that are not loaded yet. Nothing is stored."""
        extraction = self.extract(csv_file_path, target_date=target_date)
        return diff_new(self.db.list_orders(), extraction.orders)

    def loaded_orders(self) -> list[OrderLine]:
        return self.db.list_orders()

    def complete(self, order_number: str, sku: Optional[str] = None) -> int:
        """Mark loaded lines of an order as completed.

        Raises:
            NotFoundError: If no loaded line matches
        """
        updated = self.db.set_orders_completed(order_number, sku=sku, completed=True)
        if updated == 0:
            raise NotFoundError(order_lines_not_found(order_number, sku))
        return updated

    def report_problem(
        self, order_number: str, status: ProblemStatus, sku: Optional[str] = None
    ) -> int:
        """Set the problem status of loaded lines of an order.

        Args:
            order_number: Order number of the lines
            status: Problem status to set
            sku: Only update the line with this SKU

        Returns:
            Number of lines updated

        Raises:
            NotFoundError: If no loaded line matches
        """
        updated = self.db.set_problem_status(order_number, sku=sku, status=status)
        if updated == 0:
            raise NotFoundError(order_lines_not_found(order_number, sku))
        logger.info("Set problem status %s on %d lines of order %s", status.value, updated, order_number)
        return updated

    def clear_problem(self, order_number: str, sku: Optional[str] = None) -> int:
        """Remove the problem status from loaded lines of an order.

        Raises:
            NotFoundError: If no loaded line matches
        """
        updated = self.db.set_problem_status(order_number, sku=sku, status=None)
        if updated == 0:
            raise NotFoundError(order_lines_not_found(order_number, sku))
        return updated
