from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from eventhub.models import Booking, Event, Profile
from eventhub.models.booking import ACTIVE_BOOKING_STATUSES
from eventhub.models.profile import Role
from eventhub.services.error_codes import ErrorCode
from eventhub.services.exceptions import (
    BackendError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)

logger = structlog.get_logger(__name__)


def parse_id(value: Any) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def require_role(caller: Profile, role: Role, action: str) -> None:
    if caller.role != role:
        raise PermissionDeniedError(
            ErrorCode.ROLE_NOT_ALLOWED.value,
            f"only {role.value}s can {action}",
        )


def get_event(db: Session, event_id: Any, *, for_update: bool = False) -> Event:
    parsed = parse_id(event_id)
    event = None
    if parsed is not None:
        stmt = select(Event).where(Event.id == parsed)
        if for_update:
            stmt = stmt.with_for_update()
        event = db.scalar(stmt)
    if not event:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND.value, "event not found")
    return event


def require_event_owner(caller: Profile, event: Event) -> None:
    require_role(caller, Role.ORGANIZER, "manage events")
    if event.organizer_id != caller.id:
        raise PermissionDeniedError(
            ErrorCode.NOT_EVENT_ORGANIZER.value, "not organizer for this event"
        )


def active_booking_count(db: Session, event_id: uuid.UUID) -> int:
    return int(
        db.scalar(
            select(func.count())
            .select_from(Booking)
            .where(
                Booking.event_id == event_id,
                Booking.status.in_(ACTIVE_BOOKING_STATUSES),
            )
        )
        or 0
    )


def active_booking_counts(db: Session, event_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, int]:
    ids = list(event_ids)
    if not ids:
        return {}
    rows = db.execute(
        select(Booking.event_id, func.count())
        .where(
            Booking.event_id.in_(ids),
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        .group_by(Booking.event_id)
    ).all()
    counts = {event_id: 0 for event_id in ids}
    counts.update({event_id: int(count) for event_id, count in rows})
    return counts


def commit(db: Session, *, conflict: ErrorCode | None = None, message: str | None = None) -> None:
    """Commit the unit of work, translating store failures.

    A uniqueness violation becomes a ConflictError with ``conflict`` as its
    code; any other store failure becomes a BackendError.
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if conflict is None:
            logger.warning("store_integrity_error", error=str(exc.orig))
            raise BackendError(ErrorCode.BACKEND_ERROR.value, "operation failed") from exc
        raise ConflictError(conflict.value, message) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("store_commit_failed", error=str(exc))
        raise BackendError(ErrorCode.BACKEND_ERROR.value, "operation failed") from exc
