"""SQL persistence for the key-value store."""

from zenstudent.infrastructure.database.connection import Base, DatabaseManager
from zenstudent.infrastructure.database.kv_store import SqlKeyValueStore

__all__ = ["Base", "DatabaseManager", "SqlKeyValueStore"]
