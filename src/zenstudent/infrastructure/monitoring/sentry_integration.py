"""
Sentry Error Tracking Integration

Error tracking with scrubbing of secrets, chat text and trusted
contact data. Disabled unless ZEN_SENTRY_DSN is set.

PRIVACY: Request bodies carry message text and contact addresses;
they are redacted before an event leaves the process.
"""

import re
from typing import Any, Optional

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from zenstudent.config.logging_config import get_logger
from zenstudent.config.settings import Settings

logger = get_logger(__name__)

SENSITIVE_PATTERNS = [
    r"api[_-]?key[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"token[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"secret[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"bearer\s+[a-zA-Z0-9\-._~+/]+=*",
    r"[\w.+-]+@[\w-]+\.[\w.-]+",
]

SENSITIVE_KEYS = frozenset({
    "token",
    "secret",
    "api_key",
    "apikey",
    "authorization",
    "bearer",
    "credential",
    "dsn",
    "text",
    "note",
    "contact_address",
    "recipient_address",
    "trusted_contacts",
    "input_buffer",
})


def scrub_string(value: str) -> str:
    """Redact secrets and email addresses inside free text."""
    result = value
    for pattern in SENSITIVE_PATTERNS:
        result = re.sub(pattern, "[REDACTED]", result, flags=re.IGNORECASE)
    return result


def scrub(data: Any) -> Any:
    """Recursively scrub dicts, lists and strings."""
    if isinstance(data, dict):
        result = {}
        for key, value in data.items():
            key_lower = str(key).lower().replace("-", "_")
            if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS):
                result[key] = "[REDACTED]"
            else:
                result[key] = scrub(value)
        return result
    if isinstance(data, list):
        return [scrub(item) for item in data]
    if isinstance(data, str):
        return scrub_string(data)
    return data


def before_send(event: dict, hint: dict) -> Optional[dict]:
    """Scrub request payloads, breadcrumbs and extra context."""
    request = event.get("request")
    if isinstance(request, dict):
        if "data" in request:
            # Raw bodies may be strings; never forward chat text
            request["data"] = scrub(request["data"]) if isinstance(request["data"], dict) else "[REDACTED]"
        if "headers" in request:
            request["headers"] = scrub(request["headers"])

    for breadcrumb in event.get("breadcrumbs", {}).get("values", []):
        if isinstance(breadcrumb.get("data"), dict):
            breadcrumb["data"] = scrub(breadcrumb["data"])

    if "extra" in event:
        event["extra"] = scrub(event["extra"])

    return event


def before_breadcrumb(breadcrumb: dict, hint: dict) -> Optional[dict]:
    """SQL breadcrumbs may carry kv_store values; keep the statement only."""
    if breadcrumb.get("category") == "query":
        breadcrumb.pop("data", None)
    if "message" in breadcrumb and isinstance(breadcrumb["message"], str):
        breadcrumb["message"] = scrub_string(breadcrumb["message"])
    return breadcrumb


def init_sentry(settings: Settings, release: str = "zenstudent@0.1.0") -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True when Sentry was enabled
    """
    dsn = settings.monitoring.dsn.get_secret_value() if settings.monitoring.dsn else ""
    if not dsn:
        logger.info("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=settings.env,
        release=release,
        traces_sample_rate=settings.monitoring.traces_sample_rate,
        before_send=before_send,
        before_breadcrumb=before_breadcrumb,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            AsyncioIntegration(),
            LoggingIntegration(level=None, event_level=None),
        ],
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
    )

    logger.info("Sentry initialized", environment=settings.env, release=release)
    return True
