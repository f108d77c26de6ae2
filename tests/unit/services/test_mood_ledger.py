"""
Unit Tests for Mood Ledger
"""

from datetime import datetime, timedelta, timezone

import pytest

from zenstudent.domain.models.mood import MoodEntry
from zenstudent.services.mood import InvalidMoodScoreError, MoodLedger


@pytest.fixture
def ledger() -> MoodLedger:
    return MoodLedger(min_score=0, max_score=5, capacity=10)


class TestRecording:
    def test_records_in_order(self, ledger: MoodLedger) -> None:
        ledger.record(1)
        ledger.record(4, note="after the exam")

        history = ledger.history()
        assert [e.score for e in history] == [1, 4]
        assert history[1].note == "after the exam"

    def test_newest_first_for_display(self, ledger: MoodLedger) -> None:
        for score in (1, 2, 3):
            ledger.record(score)

        assert [e.score for e in ledger.history(newest_first=True)] == [3, 2, 1]

    def test_blank_note_becomes_none(self, ledger: MoodLedger) -> None:
        entry = ledger.record(3, note="   ")

        assert entry.note is None

    def test_boundaries_are_accepted(self, ledger: MoodLedger) -> None:
        ledger.record(0)
        ledger.record(5)

        assert len(ledger) == 2


class TestEviction:
    def test_eleventh_entry_evicts_the_first(self, ledger: MoodLedger) -> None:
        first = ledger.record(0)
        for score in [1, 2, 3, 4, 5, 1, 2, 3, 4, 5]:
            ledger.record(score)

        history = ledger.history()
        assert len(history) == 10
        assert first not in history
        assert history[-1].score == 5

    def test_capacity_one(self) -> None:
        ledger = MoodLedger(capacity=1)
        ledger.record(1)
        ledger.record(2)

        assert [e.score for e in ledger.history()] == [2]


class TestValidation:
    """Out-of-range scores are rejected, never clamped."""

    @pytest.mark.parametrize("score", [6, -1, 100])
    def test_out_of_range_rejected(self, ledger: MoodLedger, score: int) -> None:
        ledger.record(3)

        with pytest.raises(InvalidMoodScoreError):
            ledger.record(score)

        assert [e.score for e in ledger.history()] == [3]

    @pytest.mark.parametrize("score", [True, 2.5, "3", None])
    def test_non_integer_rejected(self, ledger: MoodLedger, score) -> None:
        with pytest.raises(InvalidMoodScoreError):
            ledger.record(score)

        assert len(ledger) == 0

    def test_custom_scale(self) -> None:
        ledger = MoodLedger(min_score=1, max_score=10)
        ledger.record(10)

        with pytest.raises(InvalidMoodScoreError):
            ledger.record(0)

    def test_invalid_configuration(self) -> None:
        with pytest.raises(ValueError):
            MoodLedger(min_score=5, max_score=1)
        with pytest.raises(ValueError):
            MoodLedger(capacity=0)


class TestAggregates:
    def test_average(self, ledger: MoodLedger) -> None:
        assert ledger.average() is None

        ledger.record(2)
        ledger.record(5)

        assert ledger.average() == 3.5

    def test_load_keeps_stored_order_over_timestamps(self) -> None:
        """Insertion order defines recency, not the clock."""
        ledger = MoodLedger()
        base = datetime(2024, 5, 1, tzinfo=timezone.utc)
        entries = [
            MoodEntry(score=1, created_at=base + timedelta(seconds=5)),
            MoodEntry(score=2, created_at=base),
        ]

        ledger.load(entries)

        assert [e.score for e in ledger.history()] == [1, 2]

    def test_load_evicts_by_stored_order(self) -> None:
        ledger = MoodLedger(capacity=2)
        base = datetime(2024, 5, 1, tzinfo=timezone.utc)
        entries = [
            MoodEntry(score=3, created_at=base + timedelta(hours=2)),
            MoodEntry(score=1, created_at=base),
            MoodEntry(score=2, created_at=base),
        ]

        ledger.load(entries)

        assert [e.score for e in ledger.history()] == [1, 2]

    def test_load_drops_out_of_range_entries(self) -> None:
        ledger = MoodLedger(min_score=1, max_score=5)

        dropped = ledger.load([MoodEntry(score=0), MoodEntry(score=4), MoodEntry(score=9)])

        assert dropped == 2
        assert [e.score for e in ledger.history()] == [4]

    def test_clear(self, ledger: MoodLedger) -> None:
        ledger.record(1)
        ledger.clear()

        assert ledger.history() == []
