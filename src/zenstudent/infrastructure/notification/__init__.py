"""Notification collaborator package."""

from zenstudent.infrastructure.notification.dispatcher import (
    LoggingNotificationDispatcher,
    NotificationDispatcher,
)

__all__ = ["NotificationDispatcher", "LoggingNotificationDispatcher"]
