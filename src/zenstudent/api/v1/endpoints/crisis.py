"""
Crisis Endpoints

Crisis banner state and explicit dismissal.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from zenstudent.api.dependencies import get_runtime
from zenstudent.runtime import CompanionRuntime
from zenstudent.services.safety import CrisisEscalationController

router = APIRouter()


class CrisisResponse(BaseModel):
    active: bool
    last_notified_at: Optional[datetime] = None
    alert_text: Optional[str] = None

    @classmethod
    def from_controller(cls, controller: CrisisEscalationController) -> "CrisisResponse":
        state = controller.state
        return cls(
            active=state.active,
            last_notified_at=state.last_notified_at,
            alert_text=controller.alert_text,
        )


@router.get(
    "",
    response_model=CrisisResponse,
    summary="Crisis mode state",
)
async def crisis_state(runtime: CompanionRuntime = Depends(get_runtime)) -> CrisisResponse:
    return CrisisResponse.from_controller(runtime.crisis)


@router.post(
    "/dismiss",
    response_model=CrisisResponse,
    summary="Dismiss crisis mode",
)
async def dismiss_crisis(runtime: CompanionRuntime = Depends(get_runtime)) -> CrisisResponse:
    runtime.crisis.dismiss()
    return CrisisResponse.from_controller(runtime.crisis)
