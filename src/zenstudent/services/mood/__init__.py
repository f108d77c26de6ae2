"""Mood tracking services."""

from zenstudent.services.mood.mood_ledger import InvalidMoodScoreError, MoodLedger

__all__ = ["InvalidMoodScoreError", "MoodLedger"]
