"""Database ORM models."""

from zenstudent.infrastructure.database.models.kv_entry_model import KeyValueEntryModel

__all__ = ["KeyValueEntryModel"]
