from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from eventhub.domain import capacity
from eventhub.models import Booking, Event, Profile
from eventhub.models.booking import ACTIVE_BOOKING_STATUSES, BookingStatus
from eventhub.models.event import EventStatus
from eventhub.models.profile import Role
from eventhub.services.common import (
    active_booking_count,
    commit,
    get_event,
    parse_id,
    require_event_owner,
    require_role,
)
from eventhub.services.error_codes import ErrorCode
from eventhub.services.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Ticket:
    booking: Booking
    event: Event


@dataclass(frozen=True)
class MyTickets:
    upcoming: list[Ticket]
    past: list[Ticket]


@dataclass(frozen=True)
class EventBooking:
    booking: Booking
    attendee: Profile


def _existing_active_booking(db: Session, event_id, attendee_id) -> Booking | None:
    return db.scalar(
        select(Booking).where(
            Booking.event_id == event_id,
            Booking.attendee_id == attendee_id,
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        )
    )


def create_booking(
    db: Session, caller: Profile, event_id: Any, now: datetime | None = None
) -> Booking:
    require_role(caller, Role.ATTENDEE, "book events")

    # Row lock on the event serialises concurrent count-then-insert for it.
    event = get_event(db, event_id, for_update=True)

    if event.status == EventStatus.CANCELLED:
        raise ConflictError(ErrorCode.EVENT_CANCELLED.value, "event is cancelled")
    if event.status != EventStatus.PUBLISHED:
        raise ConflictError(ErrorCode.EVENT_NOT_PUBLISHED.value, "event is not published")
    if event.date_time < (now or datetime.now(timezone.utc)):
        raise ConflictError(ErrorCode.EVENT_ALREADY_STARTED.value, "event has already started")

    if _existing_active_booking(db, event.id, caller.id):
        raise ConflictError(
            ErrorCode.BOOKING_ALREADY_EXISTS.value, "you already have a booking for this event"
        )

    count = active_booking_count(db, event.id)
    if capacity.is_full(event.capacity, count):
        raise ConflictError(ErrorCode.EVENT_FULL.value, "event is full")

    booking = Booking(
        event_id=event.id,
        attendee_id=caller.id,
        status=BookingStatus.CONFIRMED,
    )
    db.add(booking)
    commit(
        db,
        conflict=ErrorCode.BOOKING_ALREADY_EXISTS,
        message="you already have a booking for this event",
    )
    db.refresh(booking)

    logger.info(
        "booking_created",
        booking_id=str(booking.id),
        event_id=str(event.id),
        attendee_id=str(caller.id),
        seats_left=capacity.available_seats(event.capacity, count + 1),
    )
    return booking


def cancel_booking(db: Session, caller: Profile, booking_id: Any) -> None:
    parsed = parse_id(booking_id)
    booking = db.get(Booking, parsed) if parsed is not None else None
    if not booking:
        raise NotFoundError(ErrorCode.BOOKING_NOT_FOUND.value, "booking not found")
    if booking.attendee_id != caller.id:
        raise PermissionDeniedError(
            ErrorCode.BOOKING_NOT_OWNER.value, "only the attendee can cancel this booking"
        )
    if booking.status == BookingStatus.CHECKED_IN:
        raise ConflictError(
            ErrorCode.BOOKING_CHECKED_IN.value, "a checked-in booking cannot be cancelled"
        )

    # Cancellation keeps no history: the row goes away.
    db.delete(booking)
    commit(db)

    logger.info(
        "booking_cancelled",
        booking_id=str(booking.id),
        event_id=str(booking.event_id),
        attendee_id=str(caller.id),
    )


def list_my_bookings(db: Session, caller: Profile, now: datetime | None = None) -> MyTickets:
    require_role(caller, Role.ATTENDEE, "list bookings")
    now = now or datetime.now(timezone.utc)

    rows = db.execute(
        select(Booking, Event)
        .join(Event, Event.id == Booking.event_id)
        .where(Booking.attendee_id == caller.id)
        .order_by(Event.date_time.asc())
    ).all()

    upcoming: list[Ticket] = []
    past: list[Ticket] = []
    for booking, event in rows:
        ticket = Ticket(booking=booking, event=event)
        (upcoming if event.date_time >= now else past).append(ticket)
    past.reverse()
    return MyTickets(upcoming=upcoming, past=past)


def list_event_bookings(db: Session, caller: Profile, event_id: Any) -> list[EventBooking]:
    event = get_event(db, event_id)
    require_event_owner(caller, event)

    rows = db.execute(
        select(Booking, Profile)
        .join(Profile, Profile.id == Booking.attendee_id)
        .where(Booking.event_id == event.id)
        .order_by(Booking.booking_date.asc())
    ).all()
    return [EventBooking(booking=booking, attendee=attendee) for booking, attendee in rows]
