"""
ZenStudent Logging Configuration

structlog over the stdlib logging module. Every entry passes through
the privacy filter before it is rendered: console output while
developing, one JSON object per line elsewhere.

PRIVACY: Message text, mood notes and trusted contact data never reach
the log stream, whichever module logs them.
"""

import logging
import sys
from typing import Any

import structlog

from zenstudent import __version__
from zenstudent.config.settings import Settings

REDACTED = "[REDACTED]"

# Substrings of event keys whose values are replaced before rendering
PRIVATE_KEYS: frozenset[str] = frozenset({
    # credentials
    "password",
    "token",
    "secret",
    "api_key",
    "apikey",
    "authorization",
    "credential",
    "dsn",
    # user content
    "text",
    "note",
    "input_buffer",
    # trusted contacts
    "contact_address",
    "recipient_address",
    "trusted_contacts",
})

_QUIET_LIBRARIES = ("uvicorn.access", "httpx", "httpcore", "openai", "aiosqlite")


def is_private_key(key: str) -> bool:
    key_lower = key.lower()
    return any(private in key_lower for private in PRIVATE_KEYS)


def _scrub(key: str, value: Any) -> Any:
    if is_private_key(key):
        return REDACTED
    if isinstance(value, dict):
        return {k: _scrub(str(k), v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_scrub(key, item) for item in value]
    return value


def privacy_filter(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Replace private values; the event message itself is kept."""
    return {
        key: value if key == "event" else _scrub(key, value)
        for key, value in event_dict.items()
    }


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.setdefault("service", "zenstudent")
    event_dict.setdefault("version", __version__)
    return event_dict


def get_processors(is_development: bool) -> list[Any]:
    """
    Processor chain for the environment.

    The privacy filter runs after context merging, so values bound
    with bind_contextvars are filtered too.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        privacy_filter,
        _add_service_context,
    ]

    if is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return processors


def configure_logging(settings: Settings) -> None:
    """
    Configure structlog and the root stdlib logger.

    Safe to call more than once (the application factory calls it
    for every app it builds).
    """
    log_level = getattr(logging, settings.log_level.upper())

    structlog.configure(
        processors=get_processors(settings.env == "development"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)

    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> None:
    """Attach a request correlation ID to every entry in this context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
