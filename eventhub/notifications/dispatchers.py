from __future__ import annotations

import uuid

import structlog

from eventhub.models.volunteer_application import ApplicationStatus
from eventhub.notifications.base import NotificationDispatcher

logger = structlog.get_logger(__name__)

DECISION_TASK_NAME = "notify_application_decision"


class LoggingNotificationDispatcher(NotificationDispatcher):
    def dispatch(self, application_id: uuid.UUID, decision: ApplicationStatus) -> None:
        logger.info(
            "application_decision_notification",
            application_id=str(application_id),
            decision=decision.value,
            delivery="log",
        )


class CeleryNotificationDispatcher(NotificationDispatcher):
    def __init__(self, celery_app) -> None:
        self._celery_app = celery_app

    def dispatch(self, application_id: uuid.UUID, decision: ApplicationStatus) -> None:
        # Enqueue by name so the API process never imports the task module.
        result = self._celery_app.send_task(
            DECISION_TASK_NAME,
            args=[str(application_id), decision.value],
        )
        logger.info(
            "application_decision_enqueued",
            application_id=str(application_id),
            decision=decision.value,
            task_id=result.id,
        )
