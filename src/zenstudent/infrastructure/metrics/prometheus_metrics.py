"""
Prometheus Metrics

Counters and histograms for companion session observability.
Exposed at /metrics for Prometheus scraping.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
PRIVACY: Labels never carry message text or contact data.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)
from fastapi import APIRouter, Response

# =============================================================================
# CONVERSATION METRICS
# =============================================================================

MESSAGES_TOTAL = Counter(
    "zen_messages_total",
    "Chat messages appended to the log",
    ["role"],  # user, assistant
)

SENDS_REJECTED_TOTAL = Counter(
    "zen_sends_rejected_total",
    "Send attempts rejected by the coordinator",
    ["reason"],  # empty, in_flight
)

FALLBACK_REPLIES_TOTAL = Counter(
    "zen_fallback_replies_total",
    "Assistant replies that used the fallback text",
)

# =============================================================================
# SAFETY METRICS
# =============================================================================

HIGH_RISK_MESSAGES_TOTAL = Counter(
    "zen_high_risk_messages_total",
    "User messages flagged by the risk classifier",
)

CRISIS_ESCALATIONS_TOTAL = Counter(
    "zen_crisis_escalations_total",
    "Crisis mode entries",
    ["reentry"],  # true, false
)

NOTIFICATIONS_DISPATCHED_TOTAL = Counter(
    "zen_notifications_dispatched_total",
    "Notification payloads handed to the dispatcher",
    ["status"],  # dispatched, failed
)

# =============================================================================
# WELLBEING METRICS
# =============================================================================

MOOD_ENTRIES_TOTAL = Counter(
    "zen_mood_entries_total",
    "Mood ratings recorded",
    ["score"],
)

EXERCISES_TOTAL = Counter(
    "zen_exercises_total",
    "Exercise sessions by outcome",
    ["exercise", "outcome"],  # started, completed, cancelled, failed
)

ACTIVE_EXERCISES = Gauge(
    "zen_active_exercises",
    "Exercises currently driving a display",
)

# =============================================================================
# LLM METRICS
# =============================================================================

LLM_REQUESTS_TOTAL = Counter(
    "zen_llm_requests_total",
    "Total LLM requests by provider",
    ["provider", "status"],  # success, error, timeout
)

LLM_LATENCY = Histogram(
    "zen_llm_latency_seconds",
    "LLM response latency",
    ["provider"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "zen_system",
    "ZenStudent system information",
)

SYSTEM_INFO.info({
    "version": "0.1.0",
    "environment": "development",  # Updated at runtime
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_message(role: str) -> None:
    """Record an appended chat message."""
    MESSAGES_TOTAL.labels(role=role).inc()


def track_send_rejected(reason: str) -> None:
    """Record a rejected send."""
    SENDS_REJECTED_TOTAL.labels(reason=reason).inc()


def track_high_risk_message() -> None:
    """Record a user message flagged by the classifier."""
    HIGH_RISK_MESSAGES_TOTAL.inc()


def track_fallback_reply() -> None:
    """Record an assistant reply that used the fallback text."""
    FALLBACK_REPLIES_TOTAL.inc()


def track_crisis_escalation(reentry: bool) -> None:
    """Record a crisis mode entry."""
    CRISIS_ESCALATIONS_TOTAL.labels(reentry=str(reentry).lower()).inc()


def track_notification(status: str) -> None:
    """Record a notification dispatch attempt."""
    NOTIFICATIONS_DISPATCHED_TOTAL.labels(status=status).inc()


def track_mood_entry(score: int) -> None:
    """Record a mood rating."""
    MOOD_ENTRIES_TOTAL.labels(score=str(score)).inc()


def track_exercise(exercise: str, outcome: str) -> None:
    """Record an exercise lifecycle event."""
    EXERCISES_TOTAL.labels(exercise=exercise, outcome=outcome).inc()
    if outcome == "started":
        ACTIVE_EXERCISES.inc()
    else:
        ACTIVE_EXERCISES.dec()


def track_llm_request(provider: str, status: str, duration_seconds: float) -> None:
    """Record one provider call."""
    LLM_REQUESTS_TOTAL.labels(provider=provider, status=status).inc()
    LLM_LATENCY.labels(provider=provider).observe(duration_seconds)


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )


def update_system_info(environment: str, version: str = "0.1.0") -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })
