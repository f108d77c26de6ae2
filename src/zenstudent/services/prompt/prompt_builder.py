"""
Prompt Builder

Constructs the instruction context and the provider-ready prompt
for one conversation turn.

ARCHITECTURE: The session coordinator passes a bounded history and a
free-form context string; providers only ever see a BuiltPrompt.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from zenstudent.config.logging_config import get_logger
from zenstudent.domain.enums.conversation import Language, MessageRole
from zenstudent.services.prompt.companion_templates import get_texts

logger = get_logger(__name__)


@dataclass
class BuiltPrompt:
    """
    Complete prompt ready for an LLM provider.

    Attributes:
        system_prompt: Instruction context for the turn
        conversation_history: Prior messages as {"role", "content"} dicts
        user_message: Current user message
        max_tokens: Suggested max tokens for the reply
        temperature: Suggested temperature
    """

    system_prompt: str
    conversation_history: list[dict] = field(default_factory=list)
    user_message: str = ""
    max_tokens: int = 512
    temperature: float = 0.7

    def to_messages(self) -> list[dict]:
        """
        Convert to OpenAI-style message format.

        Returns:
            List of message dictionaries
        """
        messages = [{"role": "system", "content": self.system_prompt}]
        messages.extend(self.conversation_history)
        if self.user_message:
            messages.append({"role": "user", "content": self.user_message})
        return messages


class PromptBuilder:
    """
    Builds the per-turn instruction context and provider prompt.

    The context is the localized system instruction, extended with the
    crisis instruction when the triggering message was flagged. Crisis
    turns also get a lower temperature for steadier replies.
    """

    DEFAULT_TEMPERATURE: float = 0.7
    CRISIS_TEMPERATURE: float = 0.3
    DEFAULT_MAX_TOKENS: int = 400
    CRISIS_MAX_TOKENS: int = 500

    def build_context(self, language: Language, risk_flag: bool = False) -> str:
        """
        Build the instruction context for a turn.

        Args:
            language: Profile language
            risk_flag: Whether the triggering message was flagged

        Returns:
            Instruction string passed to the response collaborator;
            it always opens with the localized system instruction
            (infer_language depends on that)
        """
        texts = get_texts(language)
        parts = [texts.system_instruction]
        if risk_flag:
            parts.append(texts.crisis_instruction)
        return "\n\n".join(parts)

    def infer_language(self, context: str, default: Language = Language.RU) -> Language:
        """
        Language whose system instruction opens the context.

        Relies on build_context() putting the localized system
        instruction first. Only used when a caller does not pass the
        language explicitly.
        """
        for language in Language:
            if context.startswith(get_texts(language).system_instruction):
                return language
        return default

    def build(
        self,
        history: Sequence[dict],
        context: str,
        risk_flag: Optional[bool] = None,
    ) -> BuiltPrompt:
        """
        Build a provider prompt from collaborator inputs.

        Args:
            history: Ordered {"role", "text"} entries, newest last
            context: Instruction context for the turn
            risk_flag: Crisis turn marker; inferred from the context when None

        Returns:
            BuiltPrompt ready for an LLM provider
        """
        entries = [
            {
                "role": "user" if item.get("role") == MessageRole.USER.value else "assistant",
                "content": item.get("text", ""),
            }
            for item in history
        ]

        user_message = ""
        if entries and entries[-1]["role"] == "user":
            user_message = entries.pop()["content"]

        if risk_flag is None:
            risk_flag = any(
                get_texts(language).crisis_instruction in context for language in Language
            )

        prompt = BuiltPrompt(
            system_prompt=context,
            conversation_history=entries,
            user_message=user_message,
            max_tokens=self.CRISIS_MAX_TOKENS if risk_flag else self.DEFAULT_MAX_TOKENS,
            temperature=self.CRISIS_TEMPERATURE if risk_flag else self.DEFAULT_TEMPERATURE,
        )

        logger.debug(
            "Prompt built",
            history_size=len(entries),
            crisis_turn=risk_flag,
        )

        return prompt
