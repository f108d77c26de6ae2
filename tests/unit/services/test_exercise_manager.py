"""
Unit Tests for Exercise Manager

Single ownership of the running exercise and the shared close path.
"""

import asyncio

import pytest

from zenstudent.domain.enums.exercise import ExercisePhase, ExerciseType
from zenstudent.domain.models.exercise_program import ExerciseProgram, ProgramStep
from zenstudent.services.exercise import ExerciseManager, PhaseSequencer


@pytest.fixture
async def manager(sequencer):
    manager = ExerciseManager(sequencer)
    yield manager
    manager.stop()


SHORT = ExerciseProgram(
    "short",
    (ProgramStep(ExercisePhase.INHALE, 2), ProgramStep(ExercisePhase.EXHALE, 2)),
    repetitions=2,
)


class TestExerciseManager:
    async def test_start_reports_running_status(self, manager: ExerciseManager) -> None:
        status = manager.start(ExerciseType.BOX_BREATHING)

        assert status.running
        assert status.exercise_type == ExerciseType.BOX_BREATHING
        assert status.phase == ExercisePhase.INHALE
        assert status.remaining_seconds == 4
        assert status.total_cycles is None

    async def test_start_cancels_predecessor(self, manager: ExerciseManager) -> None:
        """Two sequencers never drive the display at once."""
        outcomes: list[str] = []
        manager.start(ExerciseType.BOX_BREATHING, on_close=outcomes.append)
        first = manager.handle

        manager.start(ExerciseType.BREATHING_4_6)

        assert first.cancelled
        assert manager.handle is not first
        assert outcomes == ["cancelled"]
        assert manager.status().exercise_type == ExerciseType.BREATHING_4_6

    async def test_completion_goes_through_close_path(self, manager: ExerciseManager) -> None:
        outcomes: list[str] = []
        manager.start(ExerciseType.BREATHING_4_6, on_close=outcomes.append, program=SHORT)
        handle = manager.handle

        await handle.wait()

        status = manager.status()
        assert not status.running
        assert status.last_outcome == "completed"
        assert outcomes == ["completed"]
        assert manager.handle is None

    async def test_stop_resets_status(self, manager: ExerciseManager) -> None:
        outcomes: list[str] = []
        manager.start(ExerciseType.MEDITATION, on_close=outcomes.append)
        handle = manager.handle

        status = manager.stop()
        await handle.wait()

        assert not status.running
        assert status.phase is None
        assert status.last_outcome == "cancelled"
        assert handle.cancelled
        assert outcomes == ["cancelled"]

    async def test_stop_without_exercise_is_noop(self, manager: ExerciseManager) -> None:
        status = manager.stop()

        assert not status.running
        assert status.last_outcome is None

    async def test_status_tracks_ticks(self) -> None:
        release = asyncio.Event()

        async def held_sleep(_seconds: float) -> None:
            await release.wait()

        manager = ExerciseManager(PhaseSequencer(sleep=held_sleep))
        manager.start(ExerciseType.BREATHING_4_6, program=SHORT)
        await asyncio.sleep(0)

        status = manager.status()
        assert status.phase == ExercisePhase.INHALE
        assert status.remaining_seconds == 2
        assert status.cycle == 1
        assert status.total_cycles == 2

        manager.stop()

    async def test_completed_status_keeps_exercise_type(self, manager: ExerciseManager) -> None:
        manager.start(ExerciseType.BREATHING_4_6, program=SHORT)
        await manager.handle.wait()

        assert manager.status().cycle == 0
        assert manager.status().exercise_type == ExerciseType.BREATHING_4_6

    async def test_status_is_a_copy(self, manager: ExerciseManager) -> None:
        manager.start(ExerciseType.BOX_BREATHING)
        snapshot = manager.status()
        manager.stop()

        assert snapshot.running

    async def test_failing_close_callback_is_contained(self, manager: ExerciseManager) -> None:
        def on_close(outcome: str) -> None:
            raise RuntimeError("overlay gone")

        manager.start(ExerciseType.BOX_BREATHING, on_close=on_close)
        status = manager.stop()

        assert not status.running

    async def test_status_serializes_enum_values(self, manager: ExerciseManager) -> None:
        data = manager.start(ExerciseType.BOX_BREATHING).to_dict()

        assert data["exercise_type"] == "box_breathing"
        assert data["phase"] == "inhale"
