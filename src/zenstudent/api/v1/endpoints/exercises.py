"""
Exercise Endpoints

Start, stop and poll breathing and meditation exercises.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from zenstudent.api.dependencies import get_runtime
from zenstudent.domain.enums.exercise import ExercisePhase, ExerciseType
from zenstudent.runtime import CompanionRuntime
from zenstudent.services.exercise import ExerciseStatus

router = APIRouter()


class ExerciseStatusResponse(BaseModel):
    running: bool
    exercise_type: Optional[ExerciseType] = None
    phase: Optional[ExercisePhase] = None
    remaining_seconds: Optional[int] = None
    cycle: int = 0
    total_cycles: Optional[int] = None
    last_outcome: Optional[str] = None

    @classmethod
    def from_status(cls, exercise_status: ExerciseStatus) -> "ExerciseStatusResponse":
        return cls(**exercise_status.to_dict())


@router.post(
    "/{exercise_type}/start",
    response_model=ExerciseStatusResponse,
    summary="Start an exercise, stopping any running one",
)
async def start_exercise(
    exercise_type: ExerciseType,
    runtime: CompanionRuntime = Depends(get_runtime),
) -> ExerciseStatusResponse:
    return ExerciseStatusResponse.from_status(runtime.exercises.start(exercise_type))


@router.post(
    "/stop",
    response_model=ExerciseStatusResponse,
    summary="Stop the running exercise",
)
async def stop_exercise(
    runtime: CompanionRuntime = Depends(get_runtime),
) -> ExerciseStatusResponse:
    return ExerciseStatusResponse.from_status(runtime.exercises.stop())


@router.get(
    "/status",
    response_model=ExerciseStatusResponse,
    summary="Current exercise status",
)
async def exercise_status(
    runtime: CompanionRuntime = Depends(get_runtime),
) -> ExerciseStatusResponse:
    return ExerciseStatusResponse.from_status(runtime.exercises.status())
