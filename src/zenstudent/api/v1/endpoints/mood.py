"""
Mood Endpoints
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from zenstudent.api.dependencies import get_coordinator
from zenstudent.domain.models.mood import MoodEntry
from zenstudent.services.mood import InvalidMoodScoreError
from zenstudent.services.session import SessionCoordinator

router = APIRouter()


class RecordMoodRequest(BaseModel):
    score: int = Field(..., description="Rating on the configured scale")
    note: Optional[str] = Field(default=None, max_length=500)


class MoodEntryResponse(BaseModel):
    id: str
    score: int
    created_at: datetime
    note: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: MoodEntry) -> "MoodEntryResponse":
        return cls(id=entry.id, score=entry.score, created_at=entry.created_at, note=entry.note)


class MoodHistoryResponse(BaseModel):
    """Ledger contents, newest first."""

    entries: list[MoodEntryResponse]
    average: Optional[float]
    min_score: int
    max_score: int
    capacity: int


@router.get(
    "",
    response_model=MoodHistoryResponse,
    summary="Mood history, newest first",
)
async def mood_history(
    coordinator: SessionCoordinator = Depends(get_coordinator),
) -> MoodHistoryResponse:
    ledger = coordinator.session.mood
    return MoodHistoryResponse(
        entries=[MoodEntryResponse.from_entry(e) for e in ledger.history(newest_first=True)],
        average=ledger.average(),
        min_score=ledger.min_score,
        max_score=ledger.max_score,
        capacity=ledger.capacity,
    )


@router.post(
    "",
    response_model=MoodEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a mood rating",
)
async def record_mood(
    request: RecordMoodRequest,
    coordinator: SessionCoordinator = Depends(get_coordinator),
) -> MoodEntryResponse:
    """Out-of-range scores are rejected, never clamped."""
    try:
        entry = await coordinator.record_mood(request.score, request.note)
    except InvalidMoodScoreError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    return MoodEntryResponse.from_entry(entry)
