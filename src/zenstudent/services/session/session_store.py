"""
Session Store

Serializes the session's three collections to JSON blobs under fixed
keys of a key-value store. Called explicitly after every mutation.

A blob that cannot be parsed is logged and treated as missing, so a
corrupt record never prevents the session from starting.
"""

import json
from typing import Callable, Optional, TypeVar

from zenstudent.config.logging_config import get_logger
from zenstudent.domain.models.chat_message import ChatMessage
from zenstudent.domain.models.mood import MoodEntry
from zenstudent.domain.models.profile import SessionProfile
from zenstudent.infrastructure.storage.key_value import KeyValueStore
from zenstudent.services.mood.mood_ledger import MoodLedger
from zenstudent.services.session.companion_session import CompanionSession

logger = get_logger(__name__)

T = TypeVar("T")

MESSAGES_KEY = "zen_messages"
MOODS_KEY = "zen_moods"
PROFILE_KEY = "zen_profile"


def dump_messages(messages: list[ChatMessage]) -> str:
    return json.dumps([m.to_dict() for m in messages], ensure_ascii=False)


def load_messages_blob(blob: str) -> list[ChatMessage]:
    return [ChatMessage.from_dict(item) for item in json.loads(blob)]


class SessionStore:
    """
    Usage:
        store = SessionStore(InMemoryKeyValueStore())
        await store.save(session)
        session = await store.load(MoodLedger())
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv

    @property
    def kv(self) -> KeyValueStore:
        return self._kv

    async def save_messages(self, messages: list[ChatMessage]) -> None:
        await self._kv.set(MESSAGES_KEY, dump_messages(messages))

    async def save_moods(self, entries: list[MoodEntry]) -> None:
        await self._kv.set(
            MOODS_KEY,
            json.dumps([e.to_dict() for e in entries], ensure_ascii=False),
        )

    async def save_profile(self, profile: SessionProfile) -> None:
        await self._kv.set(PROFILE_KEY, json.dumps(profile.to_dict(), ensure_ascii=False))

    async def save(self, session: CompanionSession) -> None:
        """Write all three collections."""
        await self.save_messages(session.messages)
        await self.save_moods(session.mood.history())
        await self.save_profile(session.profile)

    async def load_messages(self) -> list[ChatMessage]:
        return await self._read(MESSAGES_KEY, load_messages_blob, [])

    async def load_moods(self) -> list[MoodEntry]:
        return await self._read(
            MOODS_KEY,
            lambda blob: [MoodEntry.from_dict(item) for item in json.loads(blob)],
            [],
        )

    async def load_profile(self, default: Optional[SessionProfile] = None) -> SessionProfile:
        return await self._read(
            PROFILE_KEY,
            lambda blob: SessionProfile.from_dict(json.loads(blob)),
            SessionProfile() if default is None else default,
        )

    async def load(
        self,
        mood: Optional[MoodLedger] = None,
        default_profile: Optional[SessionProfile] = None,
    ) -> CompanionSession:
        """
        Rebuild a session from storage.

        Args:
            mood: Empty ledger configured with the score range and capacity
            default_profile: Profile used when none is stored
        """
        if mood is None:
            mood = MoodLedger()
        mood.load(await self.load_moods())
        return CompanionSession(
            profile=await self.load_profile(default_profile),
            mood=mood,
            messages=await self.load_messages(),
        )

    async def _read(self, key: str, parse: Callable[[str], T], default: T) -> T:
        blob = await self._kv.get(key)
        if blob is None:
            return default
        try:
            return parse(blob)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Stored blob is corrupt, ignoring", key=key, error=type(e).__name__)
            return default
