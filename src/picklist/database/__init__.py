"""Database layer for picklist application."""

from picklist.database.base import Database
from picklist.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
