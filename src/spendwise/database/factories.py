"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from spendwise.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "SPENDWISE_DB_PATH"
DEFAULT_DB_DIR = ".spendwise"
DEFAULT_DB_FILENAME = "spendwise.db"


def default_database_path() -> Path:
    """Location of the database when neither a path nor the env var is given."""
    return Path.home() / DEFAULT_DB_DIR / DEFAULT_DB_FILENAME


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file to use.

    Precedence: explicit argument, then SPENDWISE_DB_PATH, then
    ~/.spendwise/spendwise.db. The parent directory of the default location
    is created on demand.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV_VAR)
    if chosen:
        return Path(chosen).expanduser()

    path = default_database_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file (see resolve_database_path)

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    return SQLAlchemyDatabase(f"sqlite:///{resolve_database_path(database_path)}")


def create_memory_database() -> SQLAlchemyDatabase:
    """Create a throwaway in-memory SQLite database."""
    return SQLAlchemyDatabase("sqlite://")
