"""Domain enumerations package."""

from zenstudent.domain.enums.conversation import Language, MessageRole
from zenstudent.domain.enums.exercise import ExercisePhase, ExerciseType

__all__ = ["Language", "MessageRole", "ExercisePhase", "ExerciseType"]
