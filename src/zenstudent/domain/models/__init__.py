"""Domain models package."""

from zenstudent.domain.models.chat_message import ChatMessage, parse_timestamp, utc_now
from zenstudent.domain.models.mood import MoodEntry
from zenstudent.domain.models.profile import (
    MAX_TRUSTED_CONTACTS,
    InvalidProfileError,
    SessionProfile,
    TrustedContact,
)
from zenstudent.domain.models.risk_models import (
    CrisisState,
    EscalationAction,
    NotificationPayload,
    RiskVerdict,
)
from zenstudent.domain.models.exercise_program import (
    BOX_BREATHING,
    BREATHING_4_6,
    MEDITATION,
    ExerciseProgram,
    InvalidProgramError,
    ProgramStep,
    program_for,
)

__all__ = [
    # Conversation
    "ChatMessage",
    "parse_timestamp",
    "utc_now",
    # Mood
    "MoodEntry",
    # Profile
    "MAX_TRUSTED_CONTACTS",
    "InvalidProfileError",
    "SessionProfile",
    "TrustedContact",
    # Risk and crisis
    "CrisisState",
    "EscalationAction",
    "NotificationPayload",
    "RiskVerdict",
    # Exercise programs
    "BOX_BREATHING",
    "BREATHING_4_6",
    "MEDITATION",
    "ExerciseProgram",
    "InvalidProgramError",
    "ProgramStep",
    "program_for",
]
