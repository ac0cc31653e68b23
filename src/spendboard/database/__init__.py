"""Database layer for spendboard application."""

from spendboard.database.base import Database
from spendboard.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
