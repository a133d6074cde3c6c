"""Shared pytest fixtures for picklist tests."""

import tempfile
import os
from datetime import datetime, UTC
from pathlib import Path
import pytest

from picklist.database.factories import create_sqlite_database
from picklist.domain.column_mapping import ColumnMappingService
from picklist.domain.entities import OrderLine
from picklist.domain.order_loading import OrderLoadService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def mapping_service(temp_db):
    """Create a ColumnMappingService with a temporary database."""
    return ColumnMappingService(temp_db)


@pytest.fixture
def load_service(temp_db):
    """Create an OrderLoadService with a temporary database."""
    return OrderLoadService(temp_db)


@pytest.fixture
def make_order():
    """Build OrderLine entities with sensible defaults."""
    file_date = datetime(2024, 7, 5, 9, 30, tzinfo=UTC)

    def _make(row_index=2, **overrides):
        values = {
            "row_index": row_index,
            "order_number": f"ORD-{row_index}",
            "customer_name": f"Customer-{row_index - 1}",
            "sku": f"SKU-{row_index}",
            "quantity": 1,
            "location": "Unknown",
            "file_date": file_date,
        }
        values.update(overrides)
        return OrderLine(**values)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
