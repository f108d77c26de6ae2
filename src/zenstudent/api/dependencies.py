"""
API Dependencies

FastAPI dependencies resolving the runtime created at startup.
"""

from fastapi import Depends, HTTPException, Request, status

from zenstudent.runtime import CompanionRuntime
from zenstudent.services.session import SessionCoordinator


def get_runtime(request: Request) -> CompanionRuntime:
    """Runtime stored on the application during lifespan startup."""
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Companion runtime not initialized",
        )
    return runtime


def get_coordinator(runtime: CompanionRuntime = Depends(get_runtime)) -> SessionCoordinator:
    return runtime.coordinator
