"""Key-value persistence boundary."""

from zenstudent.infrastructure.storage.key_value import InMemoryKeyValueStore, KeyValueStore

__all__ = ["KeyValueStore", "InMemoryKeyValueStore"]
