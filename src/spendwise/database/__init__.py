"""Database layer for spendwise application."""

from spendwise.database.base import Database
from spendwise.database.factories import create_memory_database, create_sqlite_database

__all__ = ["Database", "create_memory_database", "create_sqlite_database"]
