"""
Session Profile Domain Model

User-editable configuration: language, theme, quiet mode,
sleep schedule and trusted contacts. Mutated only by direct
user edits; the safety and exercise services read it and
never change it.

PRIVACY: Trusted contact addresses are personal data and
must never be logged.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from zenstudent.domain.enums.conversation import Language


MAX_TRUSTED_CONTACTS = 3

_TIME_OF_DAY = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class InvalidProfileError(ValueError):
    """Raised when a profile edit violates a field constraint."""


@dataclass(frozen=True)
class TrustedContact:
    """
    Person notified when the user writes risk language.

    Attributes:
        name: Display name
        contact_address: Email address or phone number
    """

    name: str
    contact_address: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "contact_address": self.contact_address}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrustedContact":
        return cls(
            name=data.get("name", ""),
            contact_address=data.get("contact_address", ""),
        )


@dataclass
class SessionProfile:
    """
    Per-user settings for the companion session.

    Attributes:
        language: Interface language
        theme: Visual theme name
        quiet_mode: Suppress non-essential assistant messages
        sleep_time: Bedtime as HH:MM
        wake_time: Wake-up time as HH:MM
        reminder_enabled: Daily mood reminder switch
        trusted_contacts: Up to three trusted contacts
    """

    language: Language = Language.RU
    theme: str = "light"
    quiet_mode: bool = False
    sleep_time: str = "23:00"
    wake_time: str = "07:00"
    reminder_enabled: bool = False
    trusted_contacts: list[TrustedContact] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.language = Language(self.language)
        if self.theme not in ("light", "dark"):
            raise InvalidProfileError(f"Unknown theme: {self.theme}")
        for label, value in (("sleep_time", self.sleep_time), ("wake_time", self.wake_time)):
            if not _TIME_OF_DAY.match(value):
                raise InvalidProfileError(f"{label} must be HH:MM, got {value!r}")
        if len(self.trusted_contacts) > MAX_TRUSTED_CONTACTS:
            raise InvalidProfileError(
                f"At most {MAX_TRUSTED_CONTACTS} trusted contacts are allowed"
            )

    @property
    def primary_contact(self) -> TrustedContact | None:
        """First configured contact, used for crisis notifications."""
        return self.trusted_contacts[0] if self.trusted_contacts else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language.value,
            "theme": self.theme,
            "quiet_mode": self.quiet_mode,
            "sleep_time": self.sleep_time,
            "wake_time": self.wake_time,
            "reminder_enabled": self.reminder_enabled,
            "trusted_contacts": [c.to_dict() for c in self.trusted_contacts],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionProfile":
        return cls(
            language=Language(data.get("language", Language.RU.value)),
            theme=data.get("theme", "light"),
            quiet_mode=bool(data.get("quiet_mode", False)),
            sleep_time=data.get("sleep_time", "23:00"),
            wake_time=data.get("wake_time", "07:00"),
            reminder_enabled=bool(data.get("reminder_enabled", False)),
            trusted_contacts=[
                TrustedContact.from_dict(c) for c in data.get("trusted_contacts", [])
            ],
        )
