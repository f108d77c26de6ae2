"""
Companion Runtime

Wires settings, storage, collaborators and services into one
companion session and owns their shutdown.
"""

import asyncio
from pathlib import Path
from typing import Optional

from sqlalchemy.engine import make_url

from zenstudent.config.logging_config import get_logger
from zenstudent.config.settings import Settings
from zenstudent.domain.enums.conversation import Language
from zenstudent.domain.models.profile import SessionProfile
from zenstudent.infrastructure.database import DatabaseManager, SqlKeyValueStore
from zenstudent.infrastructure.llm import create_provider_chain
from zenstudent.infrastructure.notification import (
    LoggingNotificationDispatcher,
    NotificationDispatcher,
)
from zenstudent.infrastructure.storage import InMemoryKeyValueStore, KeyValueStore
from zenstudent.services.exercise import ExerciseManager, PhaseSequencer
from zenstudent.services.exercise.phase_sequencer import SleepFunc
from zenstudent.services.mood import MoodLedger
from zenstudent.services.orchestration import CompanionResponder, ResponseCollaborator
from zenstudent.services.safety import CrisisEscalationController, RiskClassifier
from zenstudent.services.session import SessionCoordinator, SessionStore

logger = get_logger(__name__)


class CompanionRuntime:
    """
    Service container for one companion session.

    Usage:
        runtime = await CompanionRuntime.create(settings)
        await runtime.coordinator.send("Hi")
        await runtime.shutdown()
    """

    def __init__(
        self,
        settings: Settings,
        coordinator: SessionCoordinator,
        exercises: ExerciseManager,
        kv: KeyValueStore,
        responder: ResponseCollaborator,
        db: Optional[DatabaseManager] = None,
    ) -> None:
        self.settings = settings
        self.coordinator = coordinator
        self.exercises = exercises
        self.kv = kv
        self.responder = responder
        self.db = db

    @property
    def crisis(self) -> CrisisEscalationController:
        return self.coordinator.crisis

    @classmethod
    async def create(
        cls,
        settings: Settings,
        kv: Optional[KeyValueStore] = None,
        responder: Optional[ResponseCollaborator] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> "CompanionRuntime":
        """
        Build the runtime and restore the persisted session.

        Args:
            settings: Application settings
            kv: Storage override (defaults to the configured backend)
            responder: Response collaborator override (defaults to LLM providers)
            dispatcher: Notification collaborator override
            sleep: Sequencer suspension primitive
        """
        db: Optional[DatabaseManager] = None
        if kv is None:
            kv, db = await cls._create_store(settings)

        store = SessionStore(kv)
        ledger = MoodLedger(
            min_score=settings.session.mood_min_score,
            max_score=settings.session.mood_max_score,
            capacity=settings.session.mood_capacity,
        )
        session = await store.load(
            ledger,
            default_profile=SessionProfile(language=Language(settings.session.default_language)),
        )

        if responder is None:
            primary, fallback = create_provider_chain(settings)
            responder = CompanionResponder(
                primary,
                fallback,
                timeout_seconds=settings.llm_timeout_seconds,
            )

        crisis = CrisisEscalationController(
            dispatcher or LoggingNotificationDispatcher(),
            auto_dismiss_seconds=settings.crisis.auto_dismiss_seconds,
        )
        coordinator = SessionCoordinator(
            session,
            RiskClassifier(session.profile.language),
            crisis,
            responder,
            store=store,
            history_window=settings.session.history_window,
        )
        await coordinator.start()

        exercises = ExerciseManager(PhaseSequencer(settings.exercise.tick_seconds, sleep))

        logger.info(
            "Companion runtime ready",
            storage=settings.storage.backend if db else type(kv).__name__,
            messages=len(session.messages),
            moods=len(session.mood),
        )
        return cls(settings, coordinator, exercises, kv, responder, db)

    @staticmethod
    async def _create_store(settings: Settings) -> tuple[KeyValueStore, Optional[DatabaseManager]]:
        if settings.storage.backend == "memory":
            return InMemoryKeyValueStore(), None

        url = make_url(settings.storage.url)
        if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        db = DatabaseManager(settings.storage.url, echo=settings.debug)
        await db.initialize()
        return SqlKeyValueStore(db), db

    async def health_check(self) -> dict[str, bool]:
        components: dict[str, bool] = {"session": True}
        if self.db is not None:
            components["database"] = await self.db.health_check()
        providers = getattr(self.responder, "providers", None)
        if providers is not None:
            components["llm_available"] = any(p.is_configured() for p in providers)
        return components

    async def shutdown(self) -> None:
        """Stop timers and release storage."""
        self.exercises.stop()
        self.crisis.close()
        await self.kv.close()
        logger.info("Companion runtime stopped")
