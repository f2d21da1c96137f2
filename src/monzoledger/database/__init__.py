"""Database layer for monzoledger application."""

from monzoledger.database.base import Database
from monzoledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
