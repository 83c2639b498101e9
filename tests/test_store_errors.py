from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from eventhub.api.errors import http_error_from_service
from eventhub.api.v1.schemas.events import EventCreate
from eventhub.db import SessionLocal
from eventhub.models import Event
from eventhub.services import events_service
from eventhub.services.error_codes import ErrorCode
from eventhub.services.exceptions import BackendError
from tests.factories import auth_headers


def _payload() -> EventCreate:
    return EventCreate(
        title="Outage Night",
        venue="Server Room",
        date_time="2030-01-01T18:00:00+00:00",
        capacity=5,
    )


def test_commit_failure_becomes_backend_error(db_session, organizer, monkeypatch):
    rollbacks = []
    real_rollback = db_session.rollback

    def failing_commit():
        raise OperationalError("INSERT INTO events", {}, Exception("database is locked"))

    def tracking_rollback():
        rollbacks.append(True)
        real_rollback()

    monkeypatch.setattr(db_session, "commit", failing_commit)
    monkeypatch.setattr(db_session, "rollback", tracking_rollback)

    with pytest.raises(BackendError) as exc:
        events_service.create_event(db_session, organizer, _payload())

    assert exc.value.code == ErrorCode.BACKEND_ERROR.value
    assert rollbacks == [True]

    check = SessionLocal()
    try:
        assert check.scalar(select(func.count()).select_from(Event)) == 0
    finally:
        check.close()


def test_backend_error_maps_to_503():
    err = http_error_from_service(BackendError(ErrorCode.BACKEND_ERROR.value, "operation failed"))

    assert err.status_code == 503
    assert err.detail == {"code": "BACKEND_ERROR", "message": "operation failed"}


def test_store_error_escaping_a_route_returns_503(client: TestClient, attendee, monkeypatch):
    def broken_listing(*args, **kwargs):
        raise OperationalError("SELECT FROM events", {}, Exception("connection refused"))

    monkeypatch.setattr(events_service, "list_published_events", broken_listing)

    resp = client.get("/v1/events", headers=auth_headers("ann@example.com"))

    assert resp.status_code == 503
    assert resp.json() == {"detail": {"code": "BACKEND_ERROR", "message": "operation failed"}}
