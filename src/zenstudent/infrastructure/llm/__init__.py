"""LLM provider abstraction package."""

from zenstudent.infrastructure.llm.provider import (
    ContentFilterError,
    LLMProvider,
    LLMProviderError,
    LLMResponse,
    RateLimitError,
)
from zenstudent.infrastructure.llm.provider_factory import (
    LLMProviderType,
    create_provider,
    create_provider_chain,
)

__all__ = [
    # Base types
    "LLMProvider",
    "LLMResponse",
    "LLMProviderError",
    "RateLimitError",
    "ContentFilterError",
    # Factory
    "LLMProviderType",
    "create_provider",
    "create_provider_chain",
]
