"""
SQL Key-Value Store

KeyValueStore backed by the kv_store table.
"""

from typing import Optional

from sqlalchemy import select

from zenstudent.config.logging_config import get_logger
from zenstudent.infrastructure.database.connection import DatabaseManager
from zenstudent.infrastructure.database.models import KeyValueEntryModel
from zenstudent.infrastructure.storage.key_value import KeyValueStore

logger = get_logger(__name__)


class SqlKeyValueStore(KeyValueStore):
    """
    Usage:
        db = DatabaseManager("sqlite+aiosqlite:///./data/zenstudent.db")
        await db.initialize()
        store = SqlKeyValueStore(db)
    """

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def get(self, key: str) -> Optional[str]:
        async with self._db.session() as session:
            result = await session.execute(
                select(KeyValueEntryModel.value).where(KeyValueEntryModel.key == key)
            )
            return result.scalar_one_or_none()

    async def set(self, key: str, blob: str) -> None:
        async with self._db.session() as session:
            entry = await session.get(KeyValueEntryModel, key)
            if entry is None:
                session.add(KeyValueEntryModel(key=key, value=blob))
            else:
                entry.value = blob
        logger.debug("Key written", key=key, size=len(blob))

    async def close(self) -> None:
        await self._db.close()
