from __future__ import annotations

import uuid
from types import SimpleNamespace

import pytest

from eventhub.models.volunteer_application import ApplicationStatus
from eventhub.notifications import (
    CeleryNotificationDispatcher,
    LoggingNotificationDispatcher,
    create_dispatcher,
)
from eventhub.notifications.dispatchers import DECISION_TASK_NAME
from eventhub.services import applications_service
from eventhub.worker.tasks import build_decision_message, notify_application_decision
from tests.factories import RecordingDispatcher, make_event


class FakeCelery:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def send_task(self, name, args=None, kwargs=None):
        self.calls.append((name, args))
        return SimpleNamespace(id="task-1")


def test_factory_selects_backend():
    assert isinstance(create_dispatcher("log"), LoggingNotificationDispatcher)
    assert isinstance(create_dispatcher("celery"), CeleryNotificationDispatcher)

    with pytest.raises(ValueError):
        create_dispatcher("carrier-pigeon")


def test_celery_dispatcher_enqueues_by_name():
    fake = FakeCelery()
    application_id = uuid.uuid4()

    CeleryNotificationDispatcher(fake).dispatch(application_id, ApplicationStatus.APPROVED)

    assert fake.calls == [(DECISION_TASK_NAME, [str(application_id), "approved"])]


def test_decision_message_addresses_volunteer(db_session, organizer, volunteer):
    event = make_event(db_session, organizer, title="Beach Cleanup")
    application = applications_service.apply_to_event(db_session, volunteer, event.id)
    applications_service.decide_application(
        db_session, organizer, application.id, ApplicationStatus.APPROVED, RecordingDispatcher()
    )

    message = build_decision_message(db_session, str(application.id), "approved")

    assert message["to"] == "vic@example.com"
    assert message["subject"] == "Your application for Beach Cleanup was approved"


def test_decision_task_skips_unknown_application():
    result = notify_application_decision.run(str(uuid.uuid4()), "rejected")

    assert result["status"] == "skipped"
