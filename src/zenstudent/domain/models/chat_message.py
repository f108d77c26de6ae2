"""
Chat Message Domain Model

A single entry of the companion conversation log.
Messages are immutable once appended; the session coordinator
owns the log and rendering code only reads it.

PRIVACY: Message text may contain sensitive information and
must never be written to logs.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from zenstudent.domain.enums.conversation import MessageRole


def utc_now() -> datetime:
    """Timezone-aware current time used for every domain timestamp."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """
    Rebuild a timestamp from its serialized ISO-8601 form.

    Naive values (written by older clients) are taken as UTC.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class ChatMessage:
    """
    One message in the conversation log.

    Attributes:
        id: Unique message identifier
        role: Message author (user or assistant)
        text: Message text; never empty after trim for user messages
        created_at: When the message was appended
        risk_flag: Whether the risk classifier flagged the text
    """

    role: MessageRole
    text: str
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: datetime = field(default_factory=utc_now)
    risk_flag: bool = False

    def __post_init__(self) -> None:
        if self.role == MessageRole.USER and not self.text.strip():
            raise ValueError("User message text must not be empty")

    @classmethod
    def user(cls, text: str, risk_flag: bool = False) -> "ChatMessage":
        """Create a user message."""
        return cls(role=MessageRole.USER, text=text, risk_flag=risk_flag)

    @classmethod
    def assistant(cls, text: str) -> "ChatMessage":
        """Create an assistant message."""
        return cls(role=MessageRole.ASSISTANT, text=text)

    def to_history_entry(self) -> dict[str, str]:
        """Shape used when passing history to the response collaborator."""
        return {"role": self.role.value, "text": self.text}

    def to_dict(self) -> dict[str, Any]:
        """Serialize message to dictionary."""
        return {
            "id": self.id,
            "role": self.role.value,
            "text": self.text,
            "created_at": self.created_at.isoformat(),
            "risk_flag": self.risk_flag,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChatMessage":
        """Create message from dictionary."""
        return cls(
            id=str(data["id"]) if "id" in data else uuid4().hex,
            role=MessageRole(data.get("role", MessageRole.USER.value)),
            text=data.get("text", ""),
            created_at=parse_timestamp(data["created_at"]) if "created_at" in data else utc_now(),
            risk_flag=bool(data.get("risk_flag", False)),
        )
