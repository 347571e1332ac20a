"""Client SDK: API access and live view state for ListTogether clients."""

from .api import ApiClient, Result
from .events import EventSource, EventSubscription, ServerEvent
from .notifications import NotificationCenter, NotificationView, describe, is_actionable
from .reconcile import InvitationStatusLedger, KeyedCollection, Origin, RowChange
from .session import Session, SessionStore
from .tasks import TaskListSync

__all__ = [
    "ApiClient",
    "EventSource",
    "EventSubscription",
    "InvitationStatusLedger",
    "KeyedCollection",
    "NotificationCenter",
    "NotificationView",
    "Origin",
    "Result",
    "RowChange",
    "ServerEvent",
    "Session",
    "SessionStore",
    "TaskListSync",
    "describe",
    "is_actionable",
]
