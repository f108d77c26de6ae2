"""Prompt construction and localized text package."""

from zenstudent.services.prompt.companion_templates import CompanionText, get_texts
from zenstudent.services.prompt.prompt_builder import BuiltPrompt, PromptBuilder

__all__ = ["CompanionText", "get_texts", "BuiltPrompt", "PromptBuilder"]
