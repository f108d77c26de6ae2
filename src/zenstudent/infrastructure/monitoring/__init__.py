"""Error tracking integration."""

from zenstudent.infrastructure.monitoring.sentry_integration import before_send, init_sentry, scrub

__all__ = ["before_send", "init_sentry", "scrub"]
