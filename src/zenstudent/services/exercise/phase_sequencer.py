"""
Phase Sequencer

Timed state machine behind 4-6 breathing, box breathing and the
meditation countdown. It only emits phase, time-remaining and cycle
events; it knows nothing about how they are displayed.

SAFETY-CRITICAL: After cancel() returns, no further callback may
run. Every callback is preceded by a token check and every suspension
is followed by one, so a tick that was already scheduled when the
user closed the exercise is dropped instead of delivered.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

from zenstudent.config.logging_config import get_logger
from zenstudent.domain.enums.exercise import ExercisePhase
from zenstudent.domain.models.exercise_program import ExerciseProgram, InvalidProgramError

logger = get_logger(__name__)


TickCallback = Callable[[ExercisePhase, int, int], Any]
PhaseChangeCallback = Callable[[ExercisePhase, int], Any]
CompleteCallback = Callable[[], Any]
SleepFunc = Callable[[float], Awaitable[Any]]


class CancellationToken:
    """One-way flag shared by a handle and the task it controls."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class CancelHandle:
    """
    Handle returned by PhaseSequencer.start().

    cancel() is idempotent and a no-op once the run has finished.
    """

    def __init__(self, token: CancellationToken) -> None:
        self._token = token
        self._task: Optional[asyncio.Task] = None
        self._error: Optional[BaseException] = None

    def _attach(self, task: asyncio.Task) -> None:
        self._task = task

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def error(self) -> Optional[BaseException]:
        """Consumer callback exception that stopped the run, if any."""
        return self._error

    def cancel(self) -> None:
        if self._task.done():
            return
        self._token.cancel()
        self._task.cancel()

    async def wait(self) -> None:
        """Wait for the run to end, whether completed, failed or cancelled."""
        await asyncio.wait({self._task})


class PhaseSequencer:
    """
    Runs exercise programs on the event loop.

    Each step emits on_phase_change(phase, cycle) when entered, then
    on_tick(phase, remaining, cycle) for remaining = duration..1 with one
    tick of sleep after each. Finite programs call on_complete() once
    after the last cycle; infinite programs run until cancelled.

    Usage:
        sequencer = PhaseSequencer()
        handle = sequencer.start(BREATHING_4_6, on_tick=render)
        ...
        handle.cancel()
    """

    def __init__(
        self,
        tick_seconds: float = 1.0,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """
        Initialize sequencer.

        Args:
            tick_seconds: Wall time of one tick
            sleep: Suspension primitive (replaced in tests)
        """
        if tick_seconds <= 0:
            raise ValueError("tick_seconds must be positive")
        self._tick_seconds = tick_seconds
        self._sleep = sleep

    @property
    def tick_seconds(self) -> float:
        return self._tick_seconds

    def start(
        self,
        program: ExerciseProgram,
        on_tick: Optional[TickCallback] = None,
        on_phase_change: Optional[PhaseChangeCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
    ) -> CancelHandle:
        """
        Start running a program.

        Must be called with a running event loop.

        Raises:
            InvalidProgramError: If the program is not an ExerciseProgram
        """
        if not isinstance(program, ExerciseProgram):
            raise InvalidProgramError(f"Not an exercise program: {program!r}")

        loop = asyncio.get_running_loop()
        handle = CancelHandle(CancellationToken())
        handle._attach(loop.create_task(
            self._run(program, handle, on_tick, on_phase_change, on_complete),
            name=f"exercise:{program.name}",
        ))

        logger.info(
            "Exercise sequence started",
            program=program.name,
            repetitions=program.repetitions,
        )
        return handle

    async def _run(
        self,
        program: ExerciseProgram,
        handle: CancelHandle,
        on_tick: Optional[TickCallback],
        on_phase_change: Optional[PhaseChangeCallback],
        on_complete: Optional[CompleteCallback],
    ) -> None:
        token = handle._token
        try:
            finished = await self._run_cycles(program, token, on_tick, on_phase_change)
        except Exception as e:
            handle._error = e
            logger.exception(
                "Exercise callback failed, closing sequence",
                program=program.name,
            )
            self._finish(program, token, on_complete)
            return

        if finished:
            logger.info("Exercise sequence completed", program=program.name)
            self._finish(program, token, on_complete)

    async def _run_cycles(
        self,
        program: ExerciseProgram,
        token: CancellationToken,
        on_tick: Optional[TickCallback],
        on_phase_change: Optional[PhaseChangeCallback],
    ) -> bool:
        """Drive the program; returns False when stopped by cancellation."""
        cycle = 0
        while program.repetitions is None or cycle < program.repetitions:
            cycle += 1
            for step in program.steps:
                if token.cancelled:
                    return False
                if on_phase_change is not None:
                    on_phase_change(step.phase, cycle)

                for remaining in range(step.duration_seconds, 0, -1):
                    if token.cancelled:
                        return False
                    if on_tick is not None:
                        on_tick(step.phase, remaining, cycle)
                    if token.cancelled:
                        return False
                    await self._sleep(self._tick_seconds)
                    if token.cancelled:
                        return False
        return True

    @staticmethod
    def _finish(
        program: ExerciseProgram,
        token: CancellationToken,
        on_complete: Optional[CompleteCallback],
    ) -> None:
        if token.cancelled or on_complete is None:
            return
        try:
            on_complete()
        except Exception:
            logger.exception("Exercise completion callback failed", program=program.name)
