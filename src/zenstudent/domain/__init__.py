"""
ZenStudent Domain Layer

Core entities and value objects of the companion session.
These models are independent of infrastructure.
"""

from zenstudent.domain.enums import ExercisePhase, ExerciseType, Language, MessageRole
from zenstudent.domain.models import (
    ChatMessage,
    CrisisState,
    EscalationAction,
    ExerciseProgram,
    MoodEntry,
    NotificationPayload,
    ProgramStep,
    RiskVerdict,
    SessionProfile,
    TrustedContact,
)

__all__ = [
    # Enums
    "ExercisePhase",
    "ExerciseType",
    "Language",
    "MessageRole",
    # Models
    "ChatMessage",
    "CrisisState",
    "EscalationAction",
    "ExerciseProgram",
    "MoodEntry",
    "NotificationPayload",
    "ProgramStep",
    "RiskVerdict",
    "SessionProfile",
    "TrustedContact",
]
