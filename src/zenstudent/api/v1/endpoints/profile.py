"""
Profile Endpoints

PRIVACY: Trusted contact addresses are personal data; they are
returned to the user only and never logged.
"""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from zenstudent.api.dependencies import get_coordinator
from zenstudent.domain.enums.conversation import Language
from zenstudent.domain.models.profile import (
    MAX_TRUSTED_CONTACTS,
    InvalidProfileError,
    SessionProfile,
    TrustedContact,
)
from zenstudent.services.session import SessionCoordinator

router = APIRouter()

_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class TrustedContactModel(BaseModel):
    name: str = Field(..., max_length=100)
    contact_address: str = Field(default="", max_length=254)


class ProfileModel(BaseModel):
    """Full profile; PUT replaces every field."""

    language: Language = Language.RU
    theme: Literal["light", "dark"] = "light"
    quiet_mode: bool = False
    sleep_time: str = Field(default="23:00", pattern=_TIME_PATTERN)
    wake_time: str = Field(default="07:00", pattern=_TIME_PATTERN)
    reminder_enabled: bool = False
    trusted_contacts: list[TrustedContactModel] = Field(
        default_factory=list,
        max_length=MAX_TRUSTED_CONTACTS,
    )

    @classmethod
    def from_profile(cls, profile: SessionProfile) -> "ProfileModel":
        return cls(**profile.to_dict())

    def to_profile(self) -> SessionProfile:
        return SessionProfile(
            language=self.language,
            theme=self.theme,
            quiet_mode=self.quiet_mode,
            sleep_time=self.sleep_time,
            wake_time=self.wake_time,
            reminder_enabled=self.reminder_enabled,
            trusted_contacts=[
                TrustedContact(name=c.name, contact_address=c.contact_address)
                for c in self.trusted_contacts
            ],
        )


@router.get("", response_model=ProfileModel, summary="Current profile")
async def get_profile(
    coordinator: SessionCoordinator = Depends(get_coordinator),
) -> ProfileModel:
    return ProfileModel.from_profile(coordinator.session.profile)


@router.put("", response_model=ProfileModel, summary="Replace the profile")
async def update_profile(
    request: ProfileModel,
    coordinator: SessionCoordinator = Depends(get_coordinator),
) -> ProfileModel:
    try:
        profile = request.to_profile()
    except InvalidProfileError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    await coordinator.update_profile(profile)
    return ProfileModel.from_profile(profile)
