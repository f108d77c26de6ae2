"""
Google Gemini LLM Provider

Gemini backend using native system instructions and multi-turn
contents (assistant turns map to the "model" role).
"""

import time
from typing import Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from zenstudent.config.logging_config import get_logger
from zenstudent.config.settings import GeminiSettings
from zenstudent.infrastructure.llm.provider import (
    ContentFilterError,
    LLMProvider,
    LLMProviderError,
    LLMResponse,
    RateLimitError,
    is_retryable_error,
)
from zenstudent.services.prompt.prompt_builder import BuiltPrompt

logger = get_logger(__name__)


def build_contents(prompt: BuiltPrompt) -> list[dict]:
    """
    Convert a built prompt into Gemini contents.

    Leading model turns (the greeting) are dropped and consecutive
    turns of the same role are merged, since Gemini expects the
    conversation to open with a user turn and alternate.
    """
    turns = list(prompt.conversation_history)
    if prompt.user_message:
        turns.append({"role": "user", "content": prompt.user_message})

    contents: list[dict] = []
    for turn in turns:
        role = "user" if turn.get("role") == "user" else "model"
        text = turn.get("content", "")
        if not text:
            continue
        if not contents and role == "model":
            continue
        if contents and contents[-1]["role"] == role:
            contents[-1]["parts"][0] += "\n\n" + text
        else:
            contents.append({"role": role, "parts": [text]})
    return contents


class GeminiProvider(LLMProvider):
    """
    Google Gemini API provider.

    Usage:
        provider = GeminiProvider(settings.gemini)
        response = await provider.generate(prompt)
    """

    # Dangerous-content threshold is relaxed so replies to risk
    # language are not blocked outright
    SAFETY_SETTINGS = [
        {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_ONLY_HIGH"},
    ]

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        settings = settings or GeminiSettings()

        self._api_key = api_key or settings.api_key.get_secret_value()
        self._default_model = model or settings.model
        self._configured = False

        if self._api_key and self._api_key != "CHANGE_ME":
            genai.configure(api_key=self._api_key)
            self._configured = True

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def default_model(self) -> str:
        return self._default_model

    def is_configured(self) -> bool:
        return self._configured

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception(is_retryable_error),
        reraise=True,
    )
    async def generate(
        self,
        prompt: BuiltPrompt,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        if not self.is_configured():
            raise LLMProviderError(
                "Gemini API key not configured",
                provider=self.provider_name,
            )

        contents = build_contents(prompt)
        if not contents:
            raise LLMProviderError("Nothing to send to Gemini", provider=self.provider_name)

        model_name = model or self._default_model
        gemini_model = genai.GenerativeModel(
            model_name=model_name,
            safety_settings=self.SAFETY_SETTINGS,
            system_instruction=prompt.system_prompt,
        )
        generation_config = GenerationConfig(
            max_output_tokens=max_tokens or prompt.max_tokens,
            temperature=temperature if temperature is not None else prompt.temperature,
        )

        start_time = time.time()

        try:
            response = await gemini_model.generate_content_async(
                contents,
                generation_config=generation_config,
            )
        except Exception as e:
            error_msg = str(e).lower()

            if "quota" in error_msg or "rate" in error_msg or "429" in error_msg:
                logger.warning("Gemini rate limit hit", error=str(e))
                raise RateLimitError(provider=self.provider_name, retry_after_seconds=60)

            if "safety" in error_msg or "blocked" in error_msg:
                raise ContentFilterError(provider=self.provider_name, filter_reason=str(e))

            logger.error("Gemini API error", error=str(e))
            raise LLMProviderError(
                f"Gemini API error: {e}",
                provider=self.provider_name,
                is_retryable=True,
                original_error=e,
            )

        latency_ms = int((time.time() - start_time) * 1000)

        if response.prompt_feedback and response.prompt_feedback.block_reason:
            raise ContentFilterError(
                provider=self.provider_name,
                filter_reason=str(response.prompt_feedback.block_reason),
            )

        try:
            content = (response.text or "").strip()
        except ValueError as e:
            # .text raises when the candidate was stopped by safety filters
            raise ContentFilterError(provider=self.provider_name, filter_reason=str(e))

        if not content:
            raise LLMProviderError("Gemini returned an empty reply", provider=self.provider_name)

        usage: dict = {}
        metadata = getattr(response, "usage_metadata", None)
        if metadata is not None:
            usage = {
                "prompt_tokens": metadata.prompt_token_count,
                "completion_tokens": metadata.candidates_token_count,
                "total_tokens": metadata.total_token_count,
            }

        logger.debug(
            "Gemini completion generated",
            model=model_name,
            latency_ms=latency_ms,
        )

        return LLMResponse(
            content=content,
            usage=usage,
            model=model_name,
            provider=self.provider_name,
            latency_ms=latency_ms,
            raw_response=response,
        )

    async def health_check(self) -> bool:
        if not self.is_configured():
            return False
        try:
            for _ in genai.list_models():
                break
            return True
        except Exception as e:
            logger.warning("Gemini health check failed", error=str(e))
            return False
