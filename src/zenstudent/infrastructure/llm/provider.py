"""
LLM Provider Abstract Interface

Contract for the language model backends behind the companion
responder. Nothing outside the responder talks to a provider.

ARCHITECTURE: Providers raise LLMProviderError on any failure and
never return an empty reply as success; the responder owns
fallbacks and timeouts.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from zenstudent.services.prompt.prompt_builder import BuiltPrompt


@dataclass
class LLMResponse:
    """
    Response from an LLM provider.

    Attributes:
        content: Generated reply text
        finish_reason: Why generation stopped
        usage: Token usage statistics
        model: Model identifier used
        provider: Provider name
        latency_ms: Response time in milliseconds
        raw_response: Original API response (for debugging)
    """

    content: str
    finish_reason: str = "stop"
    usage: dict = field(default_factory=dict)
    model: str = ""
    provider: str = ""
    latency_ms: int = 0
    raw_response: Optional[Any] = None


class LLMProvider(ABC):
    """Abstract LLM provider interface."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider name for logging and metrics."""
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        pass

    @abstractmethod
    async def generate(
        self,
        prompt: BuiltPrompt,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        """
        Generate a reply for a built prompt.

        Args:
            prompt: Built prompt with instructions, history and user message
            model: Optional model override
            max_tokens: Optional max tokens override
            temperature: Optional temperature override

        Returns:
            LLMResponse with non-empty content

        Raises:
            LLMProviderError: On any provider failure
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """True when an API key is present."""
        pass


class LLMProviderError(Exception):
    """Base exception for LLM provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        is_retryable: bool = False,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.is_retryable = is_retryable
        self.original_error = original_error


class RateLimitError(LLMProviderError):
    """Rate limit exceeded."""

    def __init__(
        self,
        provider: str,
        retry_after_seconds: Optional[int] = None,
    ) -> None:
        super().__init__(
            f"Rate limit exceeded for {provider}",
            provider=provider,
            is_retryable=True,
        )
        self.retry_after_seconds = retry_after_seconds


class ContentFilterError(LLMProviderError):
    """Prompt or reply blocked by the provider's safety systems."""

    def __init__(self, provider: str, filter_reason: str = "") -> None:
        super().__init__(
            f"Content filtered by {provider}: {filter_reason}",
            provider=provider,
            is_retryable=False,
        )
        self.filter_reason = filter_reason


def is_retryable_error(error: BaseException) -> bool:
    """tenacity predicate: retry transient provider failures only."""
    return isinstance(error, LLMProviderError) and error.is_retryable
