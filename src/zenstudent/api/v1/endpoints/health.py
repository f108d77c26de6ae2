"""
Health Check Endpoints

Liveness and readiness probes for load balancers and orchestrators.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from zenstudent.api.dependencies import get_runtime
from zenstudent.runtime import CompanionRuntime

router = APIRouter()

VERSION = "0.1.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response with component health."""

    ready: bool
    components: dict[str, bool]


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check(runtime: CompanionRuntime = Depends(get_runtime)) -> HealthResponse:
    """Returns 200 while the application is serving."""
    return HealthResponse(
        status="healthy",
        version=VERSION,
        environment=runtime.settings.env,
    )


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def liveness_check(runtime: CompanionRuntime = Depends(get_runtime)) -> HealthResponse:
    return HealthResponse(
        status="alive",
        version=VERSION,
        environment=runtime.settings.env,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
)
async def readiness_check(runtime: CompanionRuntime = Depends(get_runtime)) -> ReadinessResponse:
    """
    Ready when storage is reachable.

    LLM availability is reported but does not gate readiness; without
    a provider the companion answers with the fallback reply.
    """
    components = await runtime.health_check()
    return ReadinessResponse(
        ready=components.get("database", True),
        components=components,
    )
