"""
Mood Entry Domain Model
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from zenstudent.domain.models.chat_message import parse_timestamp, utc_now


@dataclass(frozen=True)
class MoodEntry:
    """
    A single mood rating made by the user.

    Range checking belongs to the mood ledger, which knows the
    configured scale; the entry only carries the value.

    Attributes:
        score: Integer rating on the configured scale
        id: Unique entry identifier
        created_at: When the rating was recorded
        note: Optional free-text note
    """

    score: int
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: datetime = field(default_factory=utc_now)
    note: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "score": self.score,
            "created_at": self.created_at.isoformat(),
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MoodEntry":
        return cls(
            id=str(data["id"]) if "id" in data else uuid4().hex,
            score=int(data["score"]),
            created_at=parse_timestamp(data["created_at"]) if "created_at" in data else utc_now(),
            note=data.get("note"),
        )
