"""
Companion Session

Explicit holder of one user's conversation state: message log, mood
ledger, profile, input buffer and the in-flight flag. Owned by the
session coordinator; everything else reads it by reference.
"""

from dataclasses import dataclass, field

from zenstudent.domain.models.chat_message import ChatMessage
from zenstudent.domain.models.profile import SessionProfile
from zenstudent.services.mood.mood_ledger import MoodLedger


@dataclass
class CompanionSession:
    """
    Attributes:
        profile: User settings
        mood: Bounded mood history
        messages: Conversation log, oldest first
        input_buffer: Draft text of the next message
        in_flight: True while a reply is being awaited
    """

    profile: SessionProfile = field(default_factory=SessionProfile)
    mood: MoodLedger = field(default_factory=MoodLedger)
    messages: list[ChatMessage] = field(default_factory=list)
    input_buffer: str = ""
    in_flight: bool = False

    def recent_messages(self, count: int) -> list[ChatMessage]:
        """Newest ``count`` messages, oldest first."""
        if count <= 0:
            return []
        return self.messages[-count:]
