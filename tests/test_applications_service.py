from __future__ import annotations

import pytest

from eventhub.models import VolunteerApplication
from eventhub.models.event import EventStatus
from eventhub.models.profile import Role
from eventhub.models.volunteer_application import ApplicationStatus
from eventhub.services import applications_service
from eventhub.services.error_codes import ErrorCode
from eventhub.services.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from tests.factories import FailingDispatcher, RecordingDispatcher, make_event, make_profile


def _apply(db, volunteer, event):
    return applications_service.apply_to_event(db, volunteer, event.id, notes="  happy to help ")


def test_volunteer_applies_once(db_session, organizer, volunteer):
    event = make_event(db_session, organizer)

    application = _apply(db_session, volunteer, event)
    assert application.status == ApplicationStatus.PENDING
    assert application.notes == "happy to help"

    with pytest.raises(ConflictError) as exc:
        _apply(db_session, volunteer, event)
    assert exc.value.code == ErrorCode.APPLICATION_ALREADY_EXISTS.value


def test_only_volunteers_can_apply(db_session, organizer, attendee):
    event = make_event(db_session, organizer)

    with pytest.raises(PermissionDeniedError):
        _apply(db_session, attendee, event)


def test_cannot_apply_to_cancelled_event(db_session, organizer, volunteer):
    event = make_event(db_session, organizer, status=EventStatus.CANCELLED)

    with pytest.raises(ConflictError) as exc:
        _apply(db_session, volunteer, event)
    assert exc.value.code == ErrorCode.EVENT_CANCELLED.value


def test_decision_is_final(db_session, organizer, volunteer):
    event = make_event(db_session, organizer)
    application = _apply(db_session, volunteer, event)
    recorder = RecordingDispatcher()

    decided = applications_service.decide_application(
        db_session, organizer, application.id, ApplicationStatus.APPROVED, recorder
    )
    assert decided.status == ApplicationStatus.APPROVED
    assert decided.decided_at is not None

    with pytest.raises(ConflictError) as exc:
        applications_service.decide_application(
            db_session, organizer, application.id, ApplicationStatus.REJECTED, recorder
        )
    assert exc.value.code == ErrorCode.APPLICATION_ALREADY_DECIDED.value

    db_session.expire_all()
    stored = db_session.get(VolunteerApplication, application.id)
    assert stored.status == ApplicationStatus.APPROVED
    assert recorder.sent == [(application.id, ApplicationStatus.APPROVED)]


def test_pending_is_not_a_decision(db_session, organizer, volunteer):
    event = make_event(db_session, organizer)
    application = _apply(db_session, volunteer, event)

    with pytest.raises(ValidationError) as exc:
        applications_service.decide_application(
            db_session, organizer, application.id, ApplicationStatus.PENDING, RecordingDispatcher()
        )
    assert exc.value.code == ErrorCode.INVALID_DECISION.value


def test_failing_notifier_does_not_undo_decision(db_session, organizer, volunteer):
    event = make_event(db_session, organizer)
    application = _apply(db_session, volunteer, event)

    decided = applications_service.decide_application(
        db_session, organizer, application.id, ApplicationStatus.REJECTED, FailingDispatcher()
    )

    assert decided.status == ApplicationStatus.REJECTED


def test_only_event_owner_decides(db_session, organizer, volunteer):
    event = make_event(db_session, organizer)
    application = _apply(db_session, volunteer, event)
    rival = make_profile(db_session, "rival@example.com", Role.ORGANIZER)
    recorder = RecordingDispatcher()

    with pytest.raises(PermissionDeniedError) as exc:
        applications_service.decide_application(
            db_session, rival, application.id, ApplicationStatus.APPROVED, recorder
        )
    assert exc.value.code == ErrorCode.NOT_EVENT_ORGANIZER.value
    assert recorder.sent == []


def test_deciding_unknown_application_is_not_found(db_session, organizer):
    with pytest.raises(NotFoundError):
        applications_service.decide_application(
            db_session, organizer, "nope", ApplicationStatus.APPROVED, RecordingDispatcher()
        )


def test_application_listings(db_session, organizer, volunteer):
    first = make_event(db_session, organizer, title="First")
    second = make_event(db_session, organizer, title="Second")
    _apply(db_session, volunteer, first)
    _apply(db_session, volunteer, second)

    mine = applications_service.list_my_applications(db_session, volunteer)
    assert {row.event.title for row in mine} == {"First", "Second"}

    rows = applications_service.list_event_applications(db_session, organizer, first.id)
    assert [row.volunteer.email for row in rows] == ["vic@example.com"]
