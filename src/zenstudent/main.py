"""
ZenStudent FastAPI Application Entry Point

Main application initialization with:
- Lifespan management (runtime startup/shutdown)
- CORS configuration
- Error handling middleware
- Router registration
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zenstudent.api.middleware.error_handler import ErrorHandlerMiddleware
from zenstudent.api.v1.router import api_router
from zenstudent.config import Settings, get_settings
from zenstudent.config.logging_config import configure_logging, get_logger
from zenstudent.infrastructure.metrics import update_system_info
from zenstudent.infrastructure.monitoring import init_sentry
from zenstudent.runtime import CompanionRuntime

logger = get_logger(__name__)

VERSION = "0.1.0"

RuntimeFactory = Callable[[Settings], Awaitable[CompanionRuntime]]


def create_application(
    settings: Optional[Settings] = None,
    runtime_factory: Optional[RuntimeFactory] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings override (defaults to environment)
        runtime_factory: Builds the runtime at startup (tests inject fakes)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    runtime_factory = runtime_factory or CompanionRuntime.create

    configure_logging(settings)
    init_sentry(settings, release=f"zenstudent@{VERSION}")
    update_system_info(settings.env, VERSION)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting ZenStudent application", env=settings.env, version=VERSION)

        runtime = await runtime_factory(settings)
        app.state.runtime = runtime
        try:
            yield
        finally:
            logger.info("Shutting down ZenStudent application")
            await runtime.shutdown()
            app.state.runtime = None
            logger.info("ZenStudent application shutdown complete")

    app = FastAPI(
        title="ZenStudent API",
        description="Supportive companion for students: chat, mood tracking and breathing exercises",
        version=VERSION,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(api_router, prefix=f"/api/{settings.api_version}")

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": "ZenStudent API",
            "version": VERSION,
            "status": "operational",
        }

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "zenstudent.main:create_application",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )
