"""Database layer for savetrack application."""

from savetrack.database.base import Database
from savetrack.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
