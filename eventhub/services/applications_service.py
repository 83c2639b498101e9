from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from eventhub.models import Event, Profile, VolunteerApplication
from eventhub.models.event import EventStatus
from eventhub.models.profile import Role
from eventhub.models.volunteer_application import DECISION_STATUSES, ApplicationStatus
from eventhub.notifications.base import NotificationDispatcher
from eventhub.services.common import (
    commit,
    get_event,
    parse_id,
    require_event_owner,
    require_role,
)
from eventhub.services.error_codes import ErrorCode
from eventhub.services.exceptions import ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EventApplication:
    application: VolunteerApplication
    volunteer: Profile


@dataclass(frozen=True)
class MyApplication:
    application: VolunteerApplication
    event: Event


def apply_to_event(
    db: Session, caller: Profile, event_id: Any, notes: str | None = None
) -> VolunteerApplication:
    require_role(caller, Role.VOLUNTEER, "apply to events")

    event = get_event(db, event_id)
    if event.status == EventStatus.CANCELLED:
        raise ConflictError(ErrorCode.EVENT_CANCELLED.value, "event is cancelled")
    if event.status != EventStatus.PUBLISHED:
        raise ConflictError(ErrorCode.EVENT_NOT_PUBLISHED.value, "event is not published")

    existing = db.scalar(
        select(VolunteerApplication.id).where(
            VolunteerApplication.event_id == event.id,
            VolunteerApplication.volunteer_id == caller.id,
        )
    )
    if existing:
        raise ConflictError(
            ErrorCode.APPLICATION_ALREADY_EXISTS.value, "you already applied to this event"
        )

    application = VolunteerApplication(
        event_id=event.id,
        volunteer_id=caller.id,
        status=ApplicationStatus.PENDING,
        notes=(notes or "").strip() or None,
    )
    db.add(application)
    commit(
        db,
        conflict=ErrorCode.APPLICATION_ALREADY_EXISTS,
        message="you already applied to this event",
    )
    db.refresh(application)

    logger.info(
        "application_submitted",
        application_id=str(application.id),
        event_id=str(event.id),
        volunteer_id=str(caller.id),
    )
    return application


def decide_application(
    db: Session,
    caller: Profile,
    application_id: Any,
    decision: ApplicationStatus,
    dispatcher: NotificationDispatcher,
) -> VolunteerApplication:
    if decision not in DECISION_STATUSES:
        raise ValidationError(
            ErrorCode.INVALID_DECISION.value, "decision must be approved or rejected"
        )

    parsed = parse_id(application_id)
    application = db.get(VolunteerApplication, parsed) if parsed is not None else None
    if not application:
        raise NotFoundError(ErrorCode.APPLICATION_NOT_FOUND.value, "application not found")

    event = get_event(db, application.event_id)
    require_event_owner(caller, event)

    # Only a pending row is updated, so a decision can never be re-applied or reverted.
    result = db.execute(
        update(VolunteerApplication)
        .where(
            VolunteerApplication.id == application.id,
            VolunteerApplication.status == ApplicationStatus.PENDING,
        )
        .values(status=decision, decided_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        db.refresh(application)
        raise ConflictError(
            ErrorCode.APPLICATION_ALREADY_DECIDED.value,
            f"application already {application.status.value}",
        )
    commit(db)
    db.refresh(application)

    logger.info(
        "application_decided",
        application_id=str(application.id),
        event_id=str(event.id),
        decision=decision.value,
    )
    _notify(dispatcher, application, decision)
    return application


def _notify(
    dispatcher: NotificationDispatcher,
    application: VolunteerApplication,
    decision: ApplicationStatus,
) -> None:
    # Fire-and-forget: the decision is already committed.
    try:
        dispatcher.dispatch(application.id, decision)
    except Exception:
        logger.exception(
            "application_notification_failed",
            application_id=str(application.id),
            decision=decision.value,
        )


def list_event_applications(db: Session, caller: Profile, event_id: Any) -> list[EventApplication]:
    event = get_event(db, event_id)
    require_event_owner(caller, event)

    rows = db.execute(
        select(VolunteerApplication, Profile)
        .join(Profile, Profile.id == VolunteerApplication.volunteer_id)
        .where(VolunteerApplication.event_id == event.id)
        .order_by(VolunteerApplication.created_at.asc())
    ).all()
    return [EventApplication(application=app, volunteer=volunteer) for app, volunteer in rows]


def list_my_applications(db: Session, caller: Profile) -> list[MyApplication]:
    require_role(caller, Role.VOLUNTEER, "list applications")

    rows = db.execute(
        select(VolunteerApplication, Event)
        .join(Event, Event.id == VolunteerApplication.event_id)
        .where(VolunteerApplication.volunteer_id == caller.id)
        .order_by(VolunteerApplication.created_at.desc())
    ).all()
    return [MyApplication(application=app, event=event) for app, event in rows]
