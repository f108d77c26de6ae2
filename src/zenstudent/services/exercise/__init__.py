"""Breathing and meditation exercise services."""

from zenstudent.services.exercise.phase_sequencer import (
    CancelHandle,
    CancellationToken,
    PhaseSequencer,
)
from zenstudent.services.exercise.exercise_manager import ExerciseManager, ExerciseStatus

__all__ = [
    "CancelHandle",
    "CancellationToken",
    "PhaseSequencer",
    "ExerciseManager",
    "ExerciseStatus",
]
