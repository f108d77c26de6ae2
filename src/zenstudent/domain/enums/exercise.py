"""
Exercise Enumerations

Phases and exercise kinds driven by the phase sequencer.
"""

from enum import StrEnum


class ExercisePhase(StrEnum):
    """
    One named stage of a breathing or meditation exercise.

    Box breathing cycles through all of inhale/hold/exhale,
    4-6 breathing uses only inhale and exhale, and the
    meditation timer is a single countdown.
    """

    INHALE = "inhale"
    HOLD = "hold"
    EXHALE = "exhale"
    COUNTDOWN = "countdown"


class ExerciseType(StrEnum):
    """Exercises offered from the quick practices menu."""

    BREATHING_4_6 = "breathing_4_6"
    """Eight cycles of a 4 second inhale and a 6 second exhale."""

    BOX_BREATHING = "box_breathing"
    """4-4-4-4 square breathing, runs until stopped."""

    MEDITATION = "meditation"
    """Three minute silent countdown."""
