"""
LLM Provider Factory

Creates providers by name from settings.

CONFIGURATION:
    ZEN_LLM_PRIMARY_PROVIDER=gemini  # or: openai
The provider not chosen as primary becomes the fallback.
"""

from enum import StrEnum
from typing import Optional

from zenstudent.config.logging_config import get_logger
from zenstudent.config.settings import Settings
from zenstudent.infrastructure.llm.provider import LLMProvider

logger = get_logger(__name__)


class LLMProviderType(StrEnum):
    """Supported LLM provider types."""

    OPENAI = "openai"
    GEMINI = "gemini"


def create_provider(provider_type: LLMProviderType | str, settings: Settings) -> LLMProvider:
    """
    Create a provider instance by type.

    Raises:
        ValueError: If unknown provider type
    """
    provider_type = LLMProviderType(provider_type)

    if provider_type == LLMProviderType.OPENAI:
        from zenstudent.infrastructure.llm.openai_provider import OpenAIProvider
        provider: LLMProvider = OpenAIProvider(settings.openai)
    else:
        from zenstudent.infrastructure.llm.gemini_provider import GeminiProvider
        provider = GeminiProvider(settings.gemini)

    logger.info(
        "LLM provider initialized",
        provider=provider_type.value,
        configured=provider.is_configured(),
    )
    return provider


def create_provider_chain(
    settings: Settings,
) -> tuple[LLMProvider, Optional[LLMProvider]]:
    """
    Build (primary, fallback) from settings.

    The fallback is omitted when it has no API key configured.
    """
    primary_type = LLMProviderType(settings.llm_primary_provider)
    fallback_type = (
        LLMProviderType.OPENAI if primary_type == LLMProviderType.GEMINI else LLMProviderType.GEMINI
    )

    primary = create_provider(primary_type, settings)
    fallback: Optional[LLMProvider] = create_provider(fallback_type, settings)
    if not fallback.is_configured():
        fallback = None

    return primary, fallback
