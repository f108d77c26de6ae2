"""Tests configuration and fixtures."""

import asyncio
from typing import Optional, Sequence

import pytest

from zenstudent.config import Settings
from zenstudent.config.settings import SessionSettings, StorageSettings
from zenstudent.domain.enums.conversation import Language
from zenstudent.domain.models.profile import SessionProfile, TrustedContact
from zenstudent.domain.models.risk_models import NotificationPayload
from zenstudent.infrastructure.notification import NotificationDispatcher
from zenstudent.infrastructure.storage import InMemoryKeyValueStore
from zenstudent.services.exercise import PhaseSequencer
from zenstudent.services.mood import MoodLedger
from zenstudent.services.orchestration import ResponseCollaborator
from zenstudent.services.safety import CrisisEscalationController, RiskClassifier
from zenstudent.services.session import CompanionSession, SessionCoordinator, SessionStore


class FakeResponder(ResponseCollaborator):
    """Scripted response collaborator that records every call."""

    def __init__(self, reply: str = "I'm here with you.") -> None:
        self.reply = reply
        self.error: Optional[Exception] = None
        self.calls: list[tuple[list[dict], str]] = []
        self.languages: list[Optional[Language]] = []
        self.started = asyncio.Event()
        self.gate: Optional[asyncio.Event] = None

    async def generate_reply(
        self,
        history: Sequence[dict],
        context: str,
        language: Optional[Language] = None,
    ) -> str:
        self.calls.append((list(history), context))
        self.languages.append(language)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


class RecordingDispatcher(NotificationDispatcher):
    """Notification collaborator that keeps payloads in memory."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.payloads: list[NotificationPayload] = []

    def dispatch(self, payload: NotificationPayload) -> None:
        self.payloads.append(payload)
        if self.fail:
            raise ConnectionError("SMTP unavailable")


async def instant_sleep(_seconds: float) -> None:
    """Yield to the loop without waiting."""
    await asyncio.sleep(0)


@pytest.fixture
def test_settings() -> Settings:
    """English settings with in-memory storage and no LLM keys."""
    return Settings(
        env="development",
        debug=True,
        session=SessionSettings(default_language="en"),
        storage=StorageSettings(backend="memory"),
    )


@pytest.fixture
def responder() -> FakeResponder:
    return FakeResponder()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def failing_dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher(fail=True)


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def sequencer() -> PhaseSequencer:
    """Sequencer whose ticks do not wait for wall time."""
    return PhaseSequencer(tick_seconds=1.0, sleep=instant_sleep)


@pytest.fixture
def trusted_contact() -> TrustedContact:
    return TrustedContact(name="Anna", contact_address="anna@example.com")


@pytest.fixture
def english_profile(trusted_contact: TrustedContact) -> SessionProfile:
    return SessionProfile(language=Language.EN, trusted_contacts=[trusted_contact])


@pytest.fixture
def crisis(dispatcher: RecordingDispatcher):
    controller = CrisisEscalationController(dispatcher, auto_dismiss_seconds=8.0)
    yield controller
    controller.close()


@pytest.fixture
def session(english_profile: SessionProfile) -> CompanionSession:
    return CompanionSession(
        profile=english_profile,
        mood=MoodLedger(min_score=0, max_score=5, capacity=10),
    )


@pytest.fixture
def coordinator(
    session: CompanionSession,
    crisis: CrisisEscalationController,
    responder: FakeResponder,
    kv_store: InMemoryKeyValueStore,
) -> SessionCoordinator:
    return SessionCoordinator(
        session,
        RiskClassifier(Language.EN),
        crisis,
        responder,
        store=SessionStore(kv_store),
        history_window=8,
    )
