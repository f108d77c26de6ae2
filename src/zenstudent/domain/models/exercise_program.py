"""
Exercise Programs

A program is an ordered sequence of timed steps, repeated a fixed
number of times or indefinitely. Programs are pure data; the phase
sequencer gives them time semantics.
"""

from dataclasses import dataclass
from typing import Optional

from zenstudent.domain.enums.exercise import ExercisePhase, ExerciseType


class InvalidProgramError(ValueError):
    """Raised when a program cannot be run (no steps, bad durations)."""


@dataclass(frozen=True)
class ProgramStep:
    """
    One timed phase of a program.

    Attributes:
        phase: Phase shown while the step runs
        duration_seconds: Whole seconds the step lasts (positive)
    """

    phase: ExercisePhase
    duration_seconds: int

    def __post_init__(self) -> None:
        if not isinstance(self.duration_seconds, int) or self.duration_seconds <= 0:
            raise InvalidProgramError(
                f"Step duration must be a positive integer, got {self.duration_seconds!r}"
            )


@dataclass(frozen=True)
class ExerciseProgram:
    """
    Ordered, finite or infinite sequence of steps.

    Attributes:
        name: Program identifier
        steps: Steps making up one cycle
        repetitions: Number of cycles, or None to repeat until cancelled
    """

    name: str
    steps: tuple[ProgramStep, ...]
    repetitions: Optional[int] = 1

    def __post_init__(self) -> None:
        if not self.steps:
            raise InvalidProgramError(f"Program {self.name!r} has no steps")
        if self.repetitions is not None and self.repetitions <= 0:
            raise InvalidProgramError(
                f"Program {self.name!r} needs a positive repetition count"
            )

    @property
    def is_infinite(self) -> bool:
        return self.repetitions is None

    @property
    def cycle_seconds(self) -> int:
        return sum(step.duration_seconds for step in self.steps)

    @property
    def total_seconds(self) -> Optional[int]:
        """Total run time, None for infinite programs."""
        if self.repetitions is None:
            return None
        return self.cycle_seconds * self.repetitions


BREATHING_4_6 = ExerciseProgram(
    name=ExerciseType.BREATHING_4_6.value,
    steps=(
        ProgramStep(ExercisePhase.INHALE, 4),
        ProgramStep(ExercisePhase.EXHALE, 6),
    ),
    repetitions=8,
)

BOX_BREATHING = ExerciseProgram(
    name=ExerciseType.BOX_BREATHING.value,
    steps=(
        ProgramStep(ExercisePhase.INHALE, 4),
        ProgramStep(ExercisePhase.HOLD, 4),
        ProgramStep(ExercisePhase.EXHALE, 4),
        ProgramStep(ExercisePhase.HOLD, 4),
    ),
    repetitions=None,
)

MEDITATION = ExerciseProgram(
    name=ExerciseType.MEDITATION.value,
    steps=(ProgramStep(ExercisePhase.COUNTDOWN, 180),),
    repetitions=1,
)

BUILTIN_PROGRAMS: dict[ExerciseType, ExerciseProgram] = {
    ExerciseType.BREATHING_4_6: BREATHING_4_6,
    ExerciseType.BOX_BREATHING: BOX_BREATHING,
    ExerciseType.MEDITATION: MEDITATION,
}


def program_for(exercise_type: ExerciseType) -> ExerciseProgram:
    """Look up the built-in program for an exercise type."""
    return BUILTIN_PROGRAMS[ExerciseType(exercise_type)]
