"""
Session Coordinator

Drives one conversation turn end to end:

1. Reject empty text and sends while a reply is in flight
2. Classify the text and append the user message
3. Hand flagged messages to the crisis controller
4. Ask the response collaborator for a reply over a bounded history
5. Append the reply and persist

SAFETY-CRITICAL: Risk classification happens before the request
leaves the process, and the in-flight flag is released in a finally
block so a failed request never blocks later sends.

PRIVACY: Message text is never logged.
"""

from typing import Any, Awaitable, Callable, Optional

from zenstudent.config.logging_config import get_logger
from zenstudent.domain.enums.conversation import Language
from zenstudent.domain.models.chat_message import ChatMessage
from zenstudent.domain.models.mood import MoodEntry
from zenstudent.domain.models.profile import SessionProfile
from zenstudent.infrastructure.metrics import (
    track_fallback_reply,
    track_high_risk_message,
    track_message,
    track_send_rejected,
)
from zenstudent.services.orchestration.companion_responder import ResponseCollaborator
from zenstudent.services.prompt.companion_templates import CompanionText, get_texts
from zenstudent.services.prompt.prompt_builder import PromptBuilder
from zenstudent.services.safety.crisis_controller import CrisisEscalationController
from zenstudent.services.safety.risk_classifier import RiskClassifier
from zenstudent.services.session.companion_session import CompanionSession
from zenstudent.services.session.session_store import SessionStore

logger = get_logger(__name__)


class SessionCoordinator:
    """
    Owner of the companion session.

    At most one send is in flight per session. Replies are appended
    strictly after their triggering user message.

    Usage:
        coordinator = SessionCoordinator(session, classifier, crisis, responder, store)
        await coordinator.start()
        reply = await coordinator.send("Hi")
    """

    DEFAULT_HISTORY_WINDOW: int = 8

    def __init__(
        self,
        session: CompanionSession,
        classifier: RiskClassifier,
        crisis: CrisisEscalationController,
        responder: ResponseCollaborator,
        store: Optional[SessionStore] = None,
        history_window: int = DEFAULT_HISTORY_WINDOW,
        prompt_builder: Optional[PromptBuilder] = None,
    ) -> None:
        """
        Initialize coordinator.

        Args:
            session: Session state owned from now on
            classifier: Risk classifier for outgoing messages
            crisis: Crisis escalation controller
            responder: Response collaborator
            store: Persistence; None keeps the session in memory only
            history_window: Prior messages sent along with the new one
            prompt_builder: Builds the instruction context
        """
        self._session = session
        self._classifier = classifier
        self._crisis = crisis
        self._responder = responder
        self._store = store
        self._history_window = history_window
        self._prompts = prompt_builder or PromptBuilder()

    @property
    def session(self) -> CompanionSession:
        return self._session

    @property
    def crisis(self) -> CrisisEscalationController:
        return self._crisis

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._session.messages)

    @property
    def in_flight(self) -> bool:
        return self._session.in_flight

    @property
    def input_buffer(self) -> str:
        return self._session.input_buffer

    @input_buffer.setter
    def input_buffer(self, value: str) -> None:
        self._session.input_buffer = value

    @property
    def texts(self) -> CompanionText:
        return get_texts(self._session.profile.language)

    async def start(self) -> None:
        """Seed the greeting when the conversation is empty."""
        if self._session.messages:
            return
        self._append(ChatMessage.assistant(self.texts.greeting))
        await self._save_messages()

    async def send(self, text: Optional[str] = None) -> Optional[ChatMessage]:
        """
        Send a user message and await the reply.

        Args:
            text: Message text; defaults to the input buffer

        Returns:
            The appended assistant message, or None when the send was rejected
        """
        raw = self._session.input_buffer if text is None else text

        if self._session.in_flight:
            track_send_rejected("in_flight")
            logger.info("Send rejected, reply already in flight")
            return None
        if not raw or not raw.strip():
            track_send_rejected("empty")
            logger.debug("Send rejected, empty text")
            return None

        verdict = self._classifier.classify(raw)
        user_message = ChatMessage.user(raw.strip(), risk_flag=verdict.is_high_risk)
        self._append(user_message)
        self._session.input_buffer = ""
        self._session.in_flight = True

        try:
            await self._save_messages()

            profile = self._session.profile
            if verdict.is_high_risk:
                track_high_risk_message()
                self._crisis.on_message_classified(verdict, profile.trusted_contacts, profile)

            history = [
                m.to_history_entry()
                for m in self._session.recent_messages(self._history_window + 1)
            ]
            context = self._prompts.build_context(profile.language, verdict.is_high_risk)

            reply = await self._request_reply(history, context, profile.language)
            assistant_message = ChatMessage.assistant(reply)
            self._append(assistant_message)
            await self._save_messages()

            logger.info(
                "Conversation turn completed",
                message_id=user_message.id,
                risk_flag=verdict.is_high_risk,
                log_size=len(self._session.messages),
            )
            return assistant_message
        finally:
            self._session.in_flight = False

    async def record_mood(self, score: int, note: Optional[str] = None) -> MoodEntry:
        """
        Record a mood rating and acknowledge it in the conversation.

        Raises:
            InvalidMoodScoreError: If the score is out of range (nothing changes)
        """
        ledger = self._session.mood
        entry = ledger.record(score, note)
        self._append(ChatMessage.assistant(self.texts.format_mood_saved(score, ledger.max_score)))

        if self._store is not None:
            await self._persist(self._store.save_moods, ledger.history())
        await self._save_messages()
        return entry

    async def update_profile(self, profile: SessionProfile) -> SessionProfile:
        """Replace the profile; the classifier follows the profile language."""
        previous = self._session.profile
        self._session.profile = profile
        if profile.language != self._classifier.language:
            self._classifier = RiskClassifier(profile.language)

        if self._store is not None:
            await self._persist(self._store.save_profile, profile)

        logger.info(
            "Profile updated",
            language=profile.language.value,
            language_changed=previous.language != profile.language,
            contacts=len(profile.trusted_contacts),
        )
        return profile

    async def _request_reply(self, history: list[dict], context: str, language: Language) -> str:
        try:
            reply = await self._responder.generate_reply(history, context, language)
        except Exception:
            logger.exception("Response collaborator raised, using fallback reply")
            reply = ""

        if not reply or not reply.strip():
            track_fallback_reply()
            return self.texts.fallback_reply
        return reply.strip()

    def _append(self, message: ChatMessage) -> None:
        self._session.messages.append(message)
        track_message(message.role.value)

    async def _save_messages(self) -> None:
        if self._store is not None:
            await self._persist(self._store.save_messages, self._session.messages)

    async def _persist(self, save: Callable[[Any], Awaitable[None]], value: Any) -> None:
        try:
            await save(value)
        except Exception:
            logger.exception("Session save failed", operation=save.__name__)
