from __future__ import annotations

from eventhub.notifications.base import NotificationDispatcher
from eventhub.notifications.dispatchers import (
    CeleryNotificationDispatcher,
    LoggingNotificationDispatcher,
)


def create_dispatcher(*args, **kwargs):
    from eventhub.notifications.factory import create_dispatcher as _create_dispatcher

    return _create_dispatcher(*args, **kwargs)


def get_dispatcher():
    from eventhub.notifications.factory import get_dispatcher as _get_dispatcher

    return _get_dispatcher()


__all__ = [
    "NotificationDispatcher",
    "LoggingNotificationDispatcher",
    "CeleryNotificationDispatcher",
    "create_dispatcher",
    "get_dispatcher",
]
