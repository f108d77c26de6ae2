"""
Conversation Enumerations
"""

from enum import StrEnum


class MessageRole(StrEnum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class Language(StrEnum):
    """
    Interface languages.

    The language selects risk keywords, instruction context
    and every user-facing string the core produces.
    """

    RU = "ru"
    EN = "en"
