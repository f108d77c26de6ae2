"""
Crisis Escalation Controller

Owns crisis mode for one companion session: enters it when a
flagged message is classified, builds the trusted-contact
notification, and manages the banner's auto-dismiss timer.

SAFETY-CRITICAL: This module decides when a trusted contact is told
that the user may need support. It must never raise, including when
no trusted contact is configured.

Banner policy:
- The alert text clears after ``auto_dismiss_seconds``
- ``CrisisState.active`` stays true until the user dismisses it
- Re-entering crisis mode re-arms the banner timer; at most one
  timer is live at any time
"""

import asyncio
from datetime import datetime
from typing import Callable, Optional, Sequence

from zenstudent.config.logging_config import get_logger
from zenstudent.domain.models.profile import SessionProfile, TrustedContact
from zenstudent.domain.models.risk_models import (
    CrisisState,
    EscalationAction,
    NotificationPayload,
    RiskVerdict,
)
from zenstudent.domain.models.chat_message import utc_now
from zenstudent.infrastructure.metrics import track_crisis_escalation, track_notification
from zenstudent.infrastructure.notification import NotificationDispatcher
from zenstudent.services.prompt.companion_templates import get_texts

logger = get_logger(__name__)


class CrisisEscalationController:
    """
    Crisis mode state machine.

    States: inactive -> active (on a flagged message) -> inactive
    (on explicit dismissal only).

    Usage:
        controller = CrisisEscalationController(dispatcher)
        action = controller.on_message_classified(verdict, contacts, profile)
        ...
        controller.dismiss()
    """

    DEFAULT_AUTO_DISMISS_SECONDS: float = 8.0

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        auto_dismiss_seconds: float = DEFAULT_AUTO_DISMISS_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize controller.

        Args:
            dispatcher: Notification collaborator
            auto_dismiss_seconds: Banner lifetime
            clock: Timestamp source for last_notified_at
        """
        self._dispatcher = dispatcher
        self._auto_dismiss_seconds = auto_dismiss_seconds
        self._clock = clock
        self._state = CrisisState()
        self._alert_text: Optional[str] = None
        self._dismiss_timer: Optional[asyncio.TimerHandle] = None

    @property
    def state(self) -> CrisisState:
        """Snapshot of the crisis state."""
        return CrisisState(
            active=self._state.active,
            last_notified_at=self._state.last_notified_at,
        )

    @property
    def active(self) -> bool:
        return self._state.active

    @property
    def alert_text(self) -> Optional[str]:
        """Banner text, None once the auto-dismiss timer fired."""
        return self._alert_text

    @property
    def has_pending_timer(self) -> bool:
        return self._dismiss_timer is not None

    def on_message_classified(
        self,
        verdict: RiskVerdict,
        contacts: Optional[Sequence[TrustedContact]],
        profile: SessionProfile,
    ) -> EscalationAction:
        """
        React to the verdict for one outgoing message.

        Args:
            verdict: Classifier output
            contacts: Trusted contacts; the first one is notified
            profile: Session profile (language of the payload)

        Returns:
            EscalationAction describing what was done
        """
        if not verdict.is_high_risk:
            return EscalationAction.none()

        reentry = self._state.active
        self._state.active = True

        payload = self.build_payload(contacts, profile)
        self._dispatch(payload)
        self._state.last_notified_at = self._clock()

        texts = get_texts(profile.language)
        self._alert_text = texts.format_alert(payload.recipient_name, payload.recipient_address)
        self._arm_dismiss_timer()

        track_crisis_escalation(reentry)
        logger.warning(
            "Crisis mode entered",
            reentry=reentry,
            matched_keyword=verdict.matched_keyword,
            has_contact=payload.has_address,
        )

        return EscalationAction(
            escalated=True,
            payload=payload,
            alert_text=self._alert_text,
        )

    def build_payload(
        self,
        contacts: Optional[Sequence[TrustedContact]],
        profile: SessionProfile,
    ) -> NotificationPayload:
        """
        Build the notification for the first configured contact.

        Missing contacts, names or addresses fall back to localized
        placeholders and an empty address.
        """
        texts = get_texts(profile.language)
        contact = contacts[0] if contacts else None

        name = (contact.name.strip() if contact and contact.name else "") or texts.contact_placeholder_name
        address = (contact.contact_address.strip() if contact and contact.contact_address else "")

        return NotificationPayload(
            recipient_name=name,
            recipient_address=address,
            message_template=texts.notification_template,
        )

    def dismiss(self) -> None:
        """Explicit user dismissal: leave crisis mode immediately."""
        was_active = self._state.active
        self._state.active = False
        self._alert_text = None
        self._cancel_dismiss_timer()
        if was_active:
            logger.info("Crisis mode dismissed by user")

    def close(self) -> None:
        """Release the banner timer (session shutdown)."""
        self._cancel_dismiss_timer()

    def _dispatch(self, payload: NotificationPayload) -> None:
        """Fire-and-forget hand-off; failures are logged only."""
        try:
            self._dispatcher.dispatch(payload)
        except Exception:
            track_notification("failed")
            logger.exception("Notification dispatch failed")
            return
        track_notification("dispatched")

    def _arm_dismiss_timer(self) -> None:
        self._cancel_dismiss_timer()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, banner auto-dismiss disabled")
            return
        self._dismiss_timer = loop.call_later(self._auto_dismiss_seconds, self._on_dismiss_timer)

    def _cancel_dismiss_timer(self) -> None:
        if self._dismiss_timer is not None:
            self._dismiss_timer.cancel()
            self._dismiss_timer = None

    def _on_dismiss_timer(self) -> None:
        self._dismiss_timer = None
        self._alert_text = None
        logger.debug("Crisis banner text auto-dismissed")
