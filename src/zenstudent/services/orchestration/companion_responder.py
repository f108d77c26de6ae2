"""
Companion Responder

Response collaborator used by the session coordinator. Turns a
bounded history and an instruction context into an assistant reply.

CONTRACT: generate_reply() always resolves to a usable string. Provider
errors, timeouts and empty replies end in the localized fallback text;
nothing is raised to the caller.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from zenstudent.config.logging_config import get_logger
from zenstudent.domain.enums.conversation import Language
from zenstudent.infrastructure.llm.provider import LLMProvider, LLMProviderError
from zenstudent.infrastructure.metrics import track_fallback_reply, track_llm_request
from zenstudent.services.prompt.companion_templates import get_texts
from zenstudent.services.prompt.prompt_builder import BuiltPrompt, PromptBuilder

logger = get_logger(__name__)


class ResponseCollaborator(ABC):
    """Anything that can answer a conversation turn."""

    @abstractmethod
    async def generate_reply(
        self,
        history: Sequence[dict],
        context: str,
        language: Optional[Language] = None,
    ) -> str:
        """
        Args:
            history: Ordered {"role", "text"} entries, newest last
            context: Instruction string for the turn
            language: Profile language of the turn (selects the fallback text)

        Returns:
            Reply text; never raises
        """
        pass


class CompanionResponder(ResponseCollaborator):
    """
    LLM-backed responder with a primary and an optional fallback provider.

    Usage:
        primary, fallback = create_provider_chain(settings)
        responder = CompanionResponder(primary, fallback, timeout_seconds=30)
        reply = await responder.generate_reply(history, context)
    """

    def __init__(
        self,
        primary: LLMProvider,
        fallback: Optional[LLMProvider] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._prompts = prompt_builder or PromptBuilder()
        self._timeout_seconds = timeout_seconds

    @property
    def providers(self) -> list[LLMProvider]:
        return [p for p in (self._primary, self._fallback) if p is not None]

    async def generate_reply(
        self,
        history: Sequence[dict],
        context: str,
        language: Optional[Language] = None,
    ) -> str:
        if language is None:
            language = self._prompts.infer_language(context)
        try:
            prompt = self._prompts.build(history, context)
        except Exception:
            logger.exception("Prompt construction failed")
            return self._fallback_reply(language)

        for provider in self.providers:
            reply = await self._try_provider(provider, prompt)
            if reply:
                return reply

        logger.error("All LLM providers failed, using fallback reply")
        return self._fallback_reply(language)

    async def _try_provider(self, provider: LLMProvider, prompt: BuiltPrompt) -> Optional[str]:
        if not provider.is_configured():
            logger.debug("LLM provider not configured, skipping", provider=provider.provider_name)
            return None

        start = time.monotonic()
        try:
            response = await asyncio.wait_for(
                provider.generate(prompt),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            track_llm_request(provider.provider_name, "timeout", time.monotonic() - start)
            logger.warning(
                "LLM provider timed out",
                provider=provider.provider_name,
                timeout_seconds=self._timeout_seconds,
            )
            return None
        except LLMProviderError as e:
            track_llm_request(provider.provider_name, "error", time.monotonic() - start)
            logger.warning("LLM provider failed", provider=e.provider, error=str(e))
            return None
        except Exception:
            track_llm_request(provider.provider_name, "error", time.monotonic() - start)
            logger.exception("Unexpected LLM provider failure", provider=provider.provider_name)
            return None

        track_llm_request(provider.provider_name, "success", time.monotonic() - start)
        logger.debug(
            "LLM reply received",
            provider=provider.provider_name,
            model=response.model,
            tokens=response.usage.get("total_tokens"),
            latency_ms=response.latency_ms,
        )
        content = (response.content or "").strip()
        return content or None

    @staticmethod
    def _fallback_reply(language: Language) -> str:
        track_fallback_reply()
        return get_texts(language).fallback_reply

