"""
Risk Models

Data models for risk classification and crisis escalation.

SAFETY-CRITICAL: This module defines what the crisis path produces.
A risk verdict is never persisted on its own; it only materializes
as the risk flag of a chat message.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class RiskVerdict:
    """
    Result of classifying one outgoing message.

    Attributes:
        is_high_risk: Whether self-harm risk language was found
        matched_keyword: Keyword that matched (for audit logging only)
    """

    is_high_risk: bool = False
    matched_keyword: Optional[str] = None


@dataclass
class CrisisState:
    """
    Process-local crisis mode state.

    SAFETY_NOTE: ``active`` becomes true only as a direct consequence
    of a flagged message and is cleared only by explicit dismissal.
    Not persisted across restarts.

    Attributes:
        active: Whether crisis mode is on
        last_notified_at: When the last notification payload was dispatched
    """

    active: bool = False
    last_notified_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "active": self.active,
            "last_notified_at": (
                self.last_notified_at.isoformat() if self.last_notified_at else None
            ),
        }


@dataclass(frozen=True)
class NotificationPayload:
    """
    Message handed to the notification collaborator.

    Attributes:
        recipient_name: Trusted contact name or localized placeholder
        recipient_address: Contact address, empty when none is configured
        message_template: Localized notification body
    """

    recipient_name: str
    recipient_address: str
    message_template: str

    @property
    def has_address(self) -> bool:
        return bool(self.recipient_address)


@dataclass(frozen=True)
class EscalationAction:
    """
    Outcome of evaluating one verdict.

    Attributes:
        escalated: Whether crisis mode was (re)entered
        payload: Notification handed to the dispatcher, if any
        alert_text: Banner text shown to the user, if any
    """

    escalated: bool = False
    payload: Optional[NotificationPayload] = None
    alert_text: Optional[str] = None

    @classmethod
    def none(cls) -> "EscalationAction":
        """No state change, nothing to dispatch."""
        return cls()
