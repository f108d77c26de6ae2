"""Companion session state, persistence and coordination."""

from zenstudent.services.session.companion_session import CompanionSession
from zenstudent.services.session.session_store import (
    MESSAGES_KEY,
    MOODS_KEY,
    PROFILE_KEY,
    SessionStore,
)
from zenstudent.services.session.coordinator import SessionCoordinator

__all__ = [
    "CompanionSession",
    "SessionStore",
    "SessionCoordinator",
    "MESSAGES_KEY",
    "MOODS_KEY",
    "PROFILE_KEY",
]
