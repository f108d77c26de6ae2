"""
Mood Ledger

Bounded, chronologically ordered record of mood ratings.
Out-of-range scores are rejected, never clamped. When the ledger is
full the oldest entry is evicted first.
"""

from collections import deque
from typing import Iterable, Optional

from zenstudent.config.logging_config import get_logger
from zenstudent.domain.models.mood import MoodEntry
from zenstudent.infrastructure.metrics import track_mood_entry

logger = get_logger(__name__)


class InvalidMoodScoreError(ValueError):
    """Raised when a score is not an integer inside the configured range."""


class MoodLedger:
    """
    FIFO-bounded mood history.

    Usage:
        ledger = MoodLedger(min_score=0, max_score=5, capacity=10)
        ledger.record(4)
        ledger.history(newest_first=True)
    """

    def __init__(self, min_score: int = 0, max_score: int = 5, capacity: int = 10) -> None:
        if min_score > max_score:
            raise ValueError("min_score must not exceed max_score")
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._min_score = min_score
        self._max_score = max_score
        self._entries: deque[MoodEntry] = deque(maxlen=capacity)

    @property
    def min_score(self) -> int:
        return self._min_score

    @property
    def max_score(self) -> int:
        return self._max_score

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def __len__(self) -> int:
        return len(self._entries)

    def validate(self, score: int) -> None:
        """
        Raises:
            InvalidMoodScoreError: If score is not an int in range
        """
        if isinstance(score, bool) or not isinstance(score, int):
            raise InvalidMoodScoreError(f"Mood score must be an integer, got {score!r}")
        if not self._min_score <= score <= self._max_score:
            raise InvalidMoodScoreError(
                f"Mood score {score} is outside {self._min_score}..{self._max_score}"
            )

    def record(self, score: int, note: Optional[str] = None) -> MoodEntry:
        """
        Validate and store a rating.

        Returns:
            The stored entry
        """
        self.validate(score)
        entry = MoodEntry(score=score, note=(note.strip() or None) if note else None)
        self._entries.append(entry)

        track_mood_entry(score)
        logger.info("Mood recorded", score=score, size=len(self._entries))
        return entry

    def history(self, newest_first: bool = False) -> list[MoodEntry]:
        """Entries oldest first, or newest first for display."""
        entries = list(self._entries)
        if newest_first:
            entries.reverse()
        return entries

    def average(self) -> Optional[float]:
        if not self._entries:
            return None
        return sum(e.score for e in self._entries) / len(self._entries)

    def load(self, entries: Iterable[MoodEntry]) -> int:
        """
        Replace contents with persisted entries, oldest first.

        Stored order is kept as is; insertion order defines recency,
        timestamps are never compared. Entries outside the configured
        scale are dropped. Only the newest ``capacity`` entries remain.

        Returns:
            Number of entries dropped as invalid
        """
        self._entries.clear()
        dropped = 0
        for entry in entries:
            try:
                self.validate(entry.score)
            except InvalidMoodScoreError:
                dropped += 1
                continue
            self._entries.append(entry)

        if dropped:
            logger.warning(
                "Dropped stored mood entries outside the scale",
                dropped=dropped,
                min_score=self._min_score,
                max_score=self._max_score,
            )
        return dropped

    def clear(self) -> None:
        self._entries.clear()
