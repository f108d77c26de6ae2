"""
Key-Value Store

Persistence collaborator boundary. The session store serializes the
message log, mood ledger and profile to string blobs and writes them
under fixed keys; backends only move opaque strings.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Abstract async string key-value store."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read a blob.

        Returns:
            Stored blob, or None when the key is absent
        """
        pass

    @abstractmethod
    async def set(self, key: str, blob: str) -> None:
        """Write (or overwrite) a blob."""
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store used in development and tests."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, blob: str) -> None:
        self._data[key] = blob

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)
