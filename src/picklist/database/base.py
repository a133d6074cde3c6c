"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from picklist.domain.entities import OrderLine, ProblemStatus


class Database(ABC):
    """Abstract database interface for picklist."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Settings operations
    @abstractmethod
    def get_column_mapping(self) -> Optional[dict[str, str]]:
        """Get the stored column mapping, or None if none is stored."""
        pass

    @abstractmethod
    def save_column_mapping(self, mapping: Optional[dict[str, str]]) -> None:
        """Store the column mapping. None clears it."""
        pass

    @abstractmethod
    def get_selected_date(self) -> Optional[str]:
        """Get the last selected target date (canonical form)."""
        pass

    @abstractmethod
    def save_selected_date(self, selected_date: Optional[str]) -> None:
        """Store the last selected target date."""
        pass

    @abstractmethod
    def get_last_sync_time(self) -> Optional[datetime]:
        """Get the time orders were last loaded."""
        pass

    @abstractmethod
    def record_sync(self, synced_at: datetime) -> None:
        """Record the time orders were loaded."""
        pass

    # Order line operations
    @abstractmethod
    def replace_orders(self, orders: list[OrderLine]) -> None:
        """Replace the loaded order collection."""
        pass

    @abstractmethod
    def append_orders(self, orders: list[OrderLine]) -> None:
        """Append order lines after the loaded collection."""
        pass

    @abstractmethod
    def list_orders(self) -> list[OrderLine]:
        """List loaded order lines in load order."""
        pass

    @abstractmethod
    def set_orders_completed(
        self, order_number: str, sku: Optional[str] = None, completed: bool = True
    ) -> int:
        """Set completion of matching order lines. Returns number of lines updated."""
        pass

    @abstractmethod
    def set_problem_status(
        self,
        order_number: str,
        sku: Optional[str] = None,
        status: Optional[ProblemStatus] = None,
    ) -> int:
        """Set (or clear, with None) the problem status of matching order lines.

        Returns number of lines updated.
        """
        pass
