"""
Notification Dispatcher

Boundary to whatever delivers crisis notifications to a trusted
contact. Delivery itself (email, SMS) is not implemented here;
the bundled dispatcher records the decision in the audit log.

ARCHITECTURE: dispatch() is fire-and-forget. The crisis controller
never awaits it and never retries; delivery failure is invisible
to the core, whose fallback is the always-visible crisis banner.
"""

from abc import ABC, abstractmethod

from zenstudent.config.logging_config import get_logger
from zenstudent.domain.models.risk_models import NotificationPayload

logger = get_logger(__name__)


class NotificationDispatcher(ABC):
    """
    Abstract notification collaborator.

    Implementations must return promptly; anything slow belongs
    in a background task the implementation schedules itself.
    """

    @abstractmethod
    def dispatch(self, payload: NotificationPayload) -> None:
        """
        Hand a payload over for delivery.

        Args:
            payload: Notification to deliver
        """
        pass


class LoggingNotificationDispatcher(NotificationDispatcher):
    """
    Dispatcher that records notifications in the structured log.

    The recipient address is redacted by the logging processors.
    """

    def dispatch(self, payload: NotificationPayload) -> None:
        logger.warning(
            "Crisis notification dispatched",
            recipient_name=payload.recipient_name,
            recipient_address=payload.recipient_address,
            has_address=payload.has_address,
        )
