"""Notification use cases."""

from .get_notifications import (
    GetNotificationsRequest,
    GetNotificationsResponse,
    GetNotificationsUseCase,
    NotificationItem,
)
from .mark_notification_read import (
    MarkNotificationReadRequest,
    MarkNotificationReadUseCase,
)

__all__ = [
    "GetNotificationsRequest",
    "GetNotificationsResponse",
    "GetNotificationsUseCase",
    "MarkNotificationReadRequest",
    "MarkNotificationReadUseCase",
    "NotificationItem",
]
