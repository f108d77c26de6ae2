"""
Risk Classifier

Keyword heuristic that flags self-harm risk language in outgoing
user messages.

SAFETY-CRITICAL: This is defense in depth, not a model. False
positives and false negatives are expected; a flagged message only
raises the crisis banner and notifies the trusted contact.
"""

from typing import Iterable

from zenstudent.domain.enums.conversation import Language
from zenstudent.domain.models.risk_models import RiskVerdict


# Substrings matched against case-folded text
RISK_KEYWORDS: dict[Language, tuple[str, ...]] = {
    Language.RU: (
        "убить",
        "суицид",
        "смерть",
        "порезать",
        "навредить себе",
        "самоубийство",
        "конец всему",
        "вскрыть вены",
        "умереть",
    ),
    Language.EN: (
        "kill myself",
        "suicide",
        "want to die",
        "end my life",
        "hurt myself",
        "self-harm",
        "self harm",
        "cut myself",
        "no reason to live",
        "better off dead",
    ),
}


class RiskClassifier:
    """
    Pure, deterministic message classifier.

    Usage:
        classifier = RiskClassifier(Language.EN)
        verdict = classifier.classify("I want to die")
        assert verdict.is_high_risk
    """

    def __init__(
        self,
        language: Language = Language.RU,
        keywords: Iterable[str] | None = None,
    ) -> None:
        """
        Initialize classifier.

        Args:
            language: Active interface language
            keywords: Override keyword set (defaults to the language's set)
        """
        self._language = Language(language)
        source = RISK_KEYWORDS[self._language] if keywords is None else keywords
        self._keywords: tuple[str, ...] = tuple(k.casefold() for k in source if k.strip())

    @property
    def language(self) -> Language:
        return self._language

    @property
    def keywords(self) -> tuple[str, ...]:
        return self._keywords

    def classify(self, text: str) -> RiskVerdict:
        """
        Classify one message.

        Empty or whitespace-only text is never high risk.

        Args:
            text: Raw message text

        Returns:
            RiskVerdict for the message
        """
        if not text or not text.strip():
            return RiskVerdict(is_high_risk=False)

        normalized = text.casefold()
        for keyword in self._keywords:
            if keyword in normalized:
                return RiskVerdict(is_high_risk=True, matched_keyword=keyword)

        return RiskVerdict(is_high_risk=False)


def classify(text: str, language: Language = Language.RU) -> RiskVerdict:
    """Classify text with the built-in keywords of ``language``."""
    return RiskClassifier(language).classify(text)
