"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from monzoledger.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "MONZOLEDGER_DB_PATH"
DEFAULT_DB_PATH = Path("~/.monzoledger/monzoledger.db")
IN_MEMORY = ":memory:"


def resolve_database_path(database_path: Optional[str] = None) -> str:
    """Pick the SQLite file to use.

    Order: explicit argument, MONZOLEDGER_DB_PATH, ~/.monzoledger/monzoledger.db.
    The parent directory is created for file databases.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV) or str(DEFAULT_DB_PATH)
    if chosen == IN_MEMORY:
        return chosen

    path = Path(chosen).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return str(path)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file, or ":memory:"

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = resolve_database_path(database_path)
    if path == IN_MEMORY:
        return SQLAlchemyDatabase("sqlite://")
    return SQLAlchemyDatabase(f"sqlite:///{path}")
