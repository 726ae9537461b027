"""Database layer for charitycomply application."""

from charitycomply.database.base import Database
from charitycomply.database.factories import create_sqlite_database, create_database

__all__ = ["Database", "create_sqlite_database", "create_database"]
