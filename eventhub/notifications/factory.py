from __future__ import annotations

from functools import lru_cache

from eventhub.core.config import settings
from eventhub.notifications.base import NotificationDispatcher
from eventhub.notifications.dispatchers import (
    CeleryNotificationDispatcher,
    LoggingNotificationDispatcher,
)


def create_dispatcher(backend: str | None = None) -> NotificationDispatcher:
    selected_backend = (backend or settings.notifications_backend).strip().lower()
    if selected_backend == "log":
        return LoggingNotificationDispatcher()
    if selected_backend == "celery":
        from eventhub.worker.celery_app import celery_app

        return CeleryNotificationDispatcher(celery_app)
    raise ValueError(f"unsupported notifications backend: {selected_backend}")


@lru_cache(maxsize=1)
def get_dispatcher() -> NotificationDispatcher:
    return create_dispatcher()
