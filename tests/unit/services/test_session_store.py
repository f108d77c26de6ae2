"""
Unit Tests for Session Store
"""

from datetime import datetime, timezone

import pytest

from zenstudent.domain.enums.conversation import Language, MessageRole
from zenstudent.domain.models.chat_message import ChatMessage
from zenstudent.domain.models.profile import SessionProfile, TrustedContact
from zenstudent.infrastructure.storage import InMemoryKeyValueStore
from zenstudent.services.mood import MoodLedger
from zenstudent.services.session import CompanionSession, SessionStore
from zenstudent.services.session.session_store import MESSAGES_KEY, MOODS_KEY, PROFILE_KEY


@pytest.fixture
def store(kv_store: InMemoryKeyValueStore) -> SessionStore:
    return SessionStore(kv_store)


class TestMessages:
    async def test_round_trip_preserves_order_and_flags(self, store: SessionStore) -> None:
        stamp = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        messages = [
            ChatMessage.assistant("Hi! How are you?"),
            ChatMessage(role=MessageRole.USER, text="не могу больше", created_at=stamp),
            ChatMessage.user("I want to die", risk_flag=True),
            ChatMessage.assistant("I'm here with you."),
        ]

        await store.save_messages(messages)
        loaded = await store.load_messages()

        assert loaded == messages
        assert loaded[1].created_at == stamp
        assert [m.risk_flag for m in loaded] == [False, False, True, False]

    async def test_missing_key_is_empty(self, store: SessionStore) -> None:
        assert await store.load_messages() == []

    async def test_corrupt_blob_is_ignored(self) -> None:
        store = SessionStore(InMemoryKeyValueStore({MESSAGES_KEY: "{not json"}))

        assert await store.load_messages() == []

    async def test_wrong_shape_is_ignored(self) -> None:
        store = SessionStore(InMemoryKeyValueStore({MESSAGES_KEY: '[{"role": "robot"}]'}))

        assert await store.load_messages() == []


class TestProfileAndMoods:
    async def test_profile_round_trip(self, store: SessionStore) -> None:
        profile = SessionProfile(
            language=Language.EN,
            theme="dark",
            sleep_time="22:30",
            trusted_contacts=[TrustedContact("Anna", "anna@example.com")],
        )

        await store.save_profile(profile)

        assert await store.load_profile() == profile

    async def test_default_profile_when_missing(self, store: SessionStore) -> None:
        default = SessionProfile(language=Language.EN)

        assert await store.load_profile(default) is default

    async def test_invalid_stored_profile_falls_back(self) -> None:
        store = SessionStore(InMemoryKeyValueStore({PROFILE_KEY: '{"theme": "neon"}'}))

        profile = await store.load_profile()

        assert profile.theme == "light"

    async def test_moods_round_trip(self, store: SessionStore) -> None:
        ledger = MoodLedger()
        ledger.record(2)
        ledger.record(5, note="sunny")

        await store.save_moods(ledger.history())

        loaded = await store.load_moods()
        assert [(e.score, e.note) for e in loaded] == [(2, None), (5, "sunny")]


class TestWholeSession:
    async def test_save_and_load(self, store: SessionStore, kv_store, english_profile) -> None:
        session = CompanionSession(profile=english_profile, mood=MoodLedger())
        session.messages.append(ChatMessage.user("hello"))
        session.mood.record(3)

        await store.save(session)
        loaded = await store.load(MoodLedger(capacity=5))

        assert set(kv_store.snapshot()) == {MESSAGES_KEY, MOODS_KEY, PROFILE_KEY}
        assert loaded.profile == english_profile
        assert [m.text for m in loaded.messages] == ["hello"]
        assert [e.score for e in loaded.mood.history()] == [3]
        assert loaded.mood.capacity == 5
        assert loaded.input_buffer == ""
        assert not loaded.in_flight

    async def test_load_trims_moods_to_capacity(self, store: SessionStore) -> None:
        ledger = MoodLedger(capacity=10)
        for score in range(6):
            ledger.record(score)
        await store.save_moods(ledger.history())

        loaded = await store.load(MoodLedger(capacity=3))

        assert [e.score for e in loaded.mood.history()] == [3, 4, 5]

    async def test_load_uses_the_given_empty_ledger(self, store: SessionStore) -> None:
        """An empty ledger is still the caller's configured ledger."""
        ledger = MoodLedger(min_score=1, max_score=5, capacity=7)

        loaded = await store.load(ledger)

        assert loaded.mood is ledger
        assert (loaded.mood.min_score, loaded.mood.max_score, loaded.mood.capacity) == (1, 5, 7)

    async def test_load_drops_moods_outside_the_configured_scale(self, store: SessionStore) -> None:
        ledger = MoodLedger(min_score=0, max_score=5)
        for score in (0, 3):
            ledger.record(score)
        await store.save_moods(ledger.history())

        loaded = await store.load(MoodLedger(min_score=1, max_score=5))

        assert [e.score for e in loaded.mood.history()] == [3]

    async def test_load_uses_the_given_default_profile(self, store: SessionStore) -> None:
        default = SessionProfile(language=Language.EN)

        loaded = await store.load(MoodLedger(), default_profile=default)

        assert loaded.profile is default
