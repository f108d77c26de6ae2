"""Metrics infrastructure package."""

from zenstudent.infrastructure.metrics.prometheus_metrics import (
    # Conversation metrics
    MESSAGES_TOTAL,
    SENDS_REJECTED_TOTAL,
    FALLBACK_REPLIES_TOTAL,
    # Safety metrics
    HIGH_RISK_MESSAGES_TOTAL,
    CRISIS_ESCALATIONS_TOTAL,
    NOTIFICATIONS_DISPATCHED_TOTAL,
    # Wellbeing metrics
    MOOD_ENTRIES_TOTAL,
    EXERCISES_TOTAL,
    ACTIVE_EXERCISES,
    # LLM metrics
    LLM_REQUESTS_TOTAL,
    LLM_LATENCY,
    # Helpers
    track_message,
    track_send_rejected,
    track_high_risk_message,
    track_fallback_reply,
    track_crisis_escalation,
    track_notification,
    track_mood_entry,
    track_exercise,
    track_llm_request,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "MESSAGES_TOTAL",
    "SENDS_REJECTED_TOTAL",
    "FALLBACK_REPLIES_TOTAL",
    "HIGH_RISK_MESSAGES_TOTAL",
    "CRISIS_ESCALATIONS_TOTAL",
    "NOTIFICATIONS_DISPATCHED_TOTAL",
    "MOOD_ENTRIES_TOTAL",
    "EXERCISES_TOTAL",
    "ACTIVE_EXERCISES",
    "LLM_REQUESTS_TOTAL",
    "LLM_LATENCY",
    "track_message",
    "track_send_rejected",
    "track_high_risk_message",
    "track_fallback_reply",
    "track_crisis_escalation",
    "track_notification",
    "track_mood_entry",
    "track_exercise",
    "track_llm_request",
    "update_system_info",
    "metrics_router",
]
