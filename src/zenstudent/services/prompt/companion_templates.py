"""
Companion Text Templates

Every user-facing string the core produces, per interface language.

SAFETY CRITICAL: The fallback reply and crisis instruction are what
a distressed user sees when the language model is unavailable or the
message was flagged. Keep them short, warm and free of clinical claims.
"""

from dataclasses import dataclass

from zenstudent.domain.enums.conversation import Language


@dataclass(frozen=True)
class CompanionText:
    """Localized strings for one interface language."""

    greeting: str
    fallback_reply: str
    mood_saved: str
    contact_placeholder_name: str
    contact_placeholder_address: str
    notification_template: str
    alert_template: str
    system_instruction: str
    crisis_instruction: str

    def format_mood_saved(self, score: int, max_score: int) -> str:
        return self.mood_saved.format(score=score, max_score=max_score)

    def format_alert(self, name: str, address: str) -> str:
        return self.alert_template.format(
            name=name,
            address=address or self.contact_placeholder_address,
        )


_SYSTEM_INSTRUCTION_RU = """Ты ZenStudent, поддерживающий собеседник для студентов.

ПРАВИЛА БЕЗОПАСНОСТИ:
- Ты не врач и не психотерапевт и никогда не выдаешь себя за них
- Не ставь диагнозов и не упоминай лекарства
- Признавай чувства собеседника, не обесценивай их
- При серьезных или повторяющихся трудностях мягко советуй обратиться к специалисту

СТИЛЬ:
- Коротко, тепло, простыми словами
- Одна мысль или одно предложение за раз
- Можно предложить дыхание 4-6, квадратное дыхание или короткую медитацию"""

_SYSTEM_INSTRUCTION_EN = """You are ZenStudent, a supportive companion for students.

SAFETY RULES:
- You are not a doctor or therapist and never claim to be
- Never diagnose and never mention medication
- Validate feelings, never dismiss them
- For serious or recurring difficulties, gently suggest a professional

STYLE:
- Short, warm, plain language
- One idea or one suggestion at a time
- You may offer 4-6 breathing, box breathing or a short meditation"""

_CRISIS_INSTRUCTION_RU = """ВНИМАНИЕ: последнее сообщение содержит слова о возможном вреде себе.
- Ответь спокойно и с заботой, прямо скажи, что его безопасность важна
- Попроси обратиться в экстренные службы (112) или на телефон доверия 8-800-2000-122
- Напомни, что рядом есть доверенный человек, которому можно написать прямо сейчас
- Не оставляй собеседника одного в разговоре, задай один бережный вопрос"""

_CRISIS_INSTRUCTION_EN = """ATTENTION: the latest message contains possible self-harm language.
- Reply calmly and with care, say plainly that their safety matters
- Ask them to contact emergency services or a crisis line right now
- Remind them a trusted person can be reached immediately
- Stay with them in the conversation and ask one gentle question"""


TEXTS: dict[Language, CompanionText] = {
    Language.RU: CompanionText(
        greeting="Привет! Я ZenStudent. Я здесь, чтобы поддержать тебя. О чем ты думаешь сейчас?",
        fallback_reply=(
            "Извини, мне сейчас трудно ответить. Я рядом. "
            "Если тебе очень плохо, позвони на телефон доверия 8-800-2000-122 или в 112."
        ),
        mood_saved="Я сохранил твою оценку ({score}/{max_score}). Спасибо, что делишься со мной.",
        contact_placeholder_name="доверенное лицо",
        contact_placeholder_address="указанный контакт",
        notification_template=(
            "Ваш близкий указал вас как доверенное лицо. Сейчас ему может "
            "потребоваться поддержка. Пожалуйста, свяжитесь с ним."
        ),
        alert_template="⚠️ Уведомление автоматически отправлено: {name} ({address})",
        system_instruction=_SYSTEM_INSTRUCTION_RU,
        crisis_instruction=_CRISIS_INSTRUCTION_RU,
    ),
    Language.EN: CompanionText(
        greeting="Hi! I'm ZenStudent. I'm here to support you. What's on your mind right now?",
        fallback_reply=(
            "Sorry, I'm having trouble answering right now, but I'm still here. "
            "If you feel unsafe, please call your local emergency number or a crisis line."
        ),
        mood_saved="I saved your rating ({score}/{max_score}). Thank you for sharing with me.",
        contact_placeholder_name="trusted contact",
        contact_placeholder_address="the listed contact",
        notification_template=(
            "Your loved one listed you as a trusted contact. They may need "
            "support right now. Please get in touch with them."
        ),
        alert_template="⚠️ Notification sent automatically: {name} ({address})",
        system_instruction=_SYSTEM_INSTRUCTION_EN,
        crisis_instruction=_CRISIS_INSTRUCTION_EN,
    ),
}


def get_texts(language: Language | str) -> CompanionText:
    """Strings for the given language, defaulting to Russian."""
    try:
        return TEXTS[Language(language)]
    except ValueError:
        return TEXTS[Language.RU]
