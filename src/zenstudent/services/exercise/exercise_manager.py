"""
Exercise Manager

Single owner of the running exercise. Starting a new exercise cancels
the previous one first, so two sequencers never drive the same display.
Completion, explicit stop and callback failure all end in the same
close path.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Optional

from zenstudent.config.logging_config import get_logger
from zenstudent.domain.enums.exercise import ExercisePhase, ExerciseType
from zenstudent.domain.models.exercise_program import ExerciseProgram, program_for
from zenstudent.infrastructure.metrics import track_exercise
from zenstudent.services.exercise.phase_sequencer import CancelHandle, PhaseSequencer

logger = get_logger(__name__)


CloseCallback = Callable[[str], Any]


@dataclass
class ExerciseStatus:
    """
    Snapshot of the exercise overlay.

    Attributes:
        running: Whether a sequence is driving the display
        exercise_type: Exercise being run (or last run)
        phase: Current phase
        remaining_seconds: Seconds left in the current step
        cycle: 1-based repetition counter
        total_cycles: Repetitions of the program, None when infinite
        last_outcome: How the previous run ended (completed, cancelled, failed)
    """

    running: bool = False
    exercise_type: Optional[ExerciseType] = None
    phase: Optional[ExercisePhase] = None
    remaining_seconds: Optional[int] = None
    cycle: int = 0
    total_cycles: Optional[int] = None
    last_outcome: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["exercise_type"] = self.exercise_type.value if self.exercise_type else None
        data["phase"] = self.phase.value if self.phase else None
        return data


class ExerciseManager:
    """
    Starts, stops and reports on the active exercise.

    Usage:
        manager = ExerciseManager(PhaseSequencer())
        manager.start(ExerciseType.BOX_BREATHING)
        manager.status()
        manager.stop()
    """

    def __init__(self, sequencer: PhaseSequencer) -> None:
        self._sequencer = sequencer
        self._handle: Optional[CancelHandle] = None
        self._status = ExerciseStatus()
        self._on_close: Optional[CloseCallback] = None

    @property
    def handle(self) -> Optional[CancelHandle]:
        return self._handle

    def status(self) -> ExerciseStatus:
        """Copy of the current status."""
        return replace(self._status)

    def start(
        self,
        exercise_type: ExerciseType,
        on_close: Optional[CloseCallback] = None,
        program: Optional[ExerciseProgram] = None,
    ) -> ExerciseStatus:
        """
        Start an exercise, cancelling any running one first.

        Args:
            exercise_type: Built-in exercise to run
            on_close: Called with the outcome when the run ends
            program: Override program (defaults to the built-in one)

        Returns:
            Status snapshot right after starting
        """
        exercise_type = ExerciseType(exercise_type)
        if self._handle is not None:
            self._close("cancelled")

        program = program or program_for(exercise_type)
        first = program.steps[0]
        self._status = ExerciseStatus(
            running=True,
            exercise_type=exercise_type,
            phase=first.phase,
            remaining_seconds=first.duration_seconds,
            cycle=1,
            total_cycles=program.repetitions,
        )
        self._on_close = on_close

        handle_ref: list[CancelHandle] = []

        def on_tick(phase: ExercisePhase, remaining: int, cycle: int) -> None:
            self._status.phase = phase
            self._status.remaining_seconds = remaining
            self._status.cycle = cycle

        def on_phase_change(phase: ExercisePhase, cycle: int) -> None:
            self._status.phase = phase
            self._status.cycle = cycle

        def on_complete() -> None:
            if not handle_ref or handle_ref[0] is not self._handle:
                return
            self._close("failed" if self._handle.error else "completed")

        self._handle = self._sequencer.start(
            program,
            on_tick=on_tick,
            on_phase_change=on_phase_change,
            on_complete=on_complete,
        )
        handle_ref.append(self._handle)

        track_exercise(exercise_type.value, "started")
        logger.info("Exercise started", exercise=exercise_type.value)
        return self.status()

    def stop(self) -> ExerciseStatus:
        """Stop the running exercise; a no-op when nothing runs."""
        if self._handle is not None:
            self._close("cancelled")
        return self.status()

    def _close(self, outcome: str) -> None:
        """The single path that ends a run."""
        handle, self._handle = self._handle, None
        if handle is not None and outcome == "cancelled":
            handle.cancel()

        exercise_type = self._status.exercise_type
        self._status = ExerciseStatus(exercise_type=exercise_type, last_outcome=outcome)

        if exercise_type is not None:
            track_exercise(exercise_type.value, outcome)
        logger.info(
            "Exercise closed",
            exercise=exercise_type.value if exercise_type else None,
            outcome=outcome,
        )

        on_close, self._on_close = self._on_close, None
        if on_close is not None:
            try:
                on_close(outcome)
            except Exception:
                logger.exception("Exercise close callback failed")
