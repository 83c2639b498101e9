from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from eventhub.core.config import settings
from eventhub.domain import dashboard
from eventhub.domain.dashboard import BookingSnapshot, EventSnapshot
from eventhub.models import Booking, Event, Profile
from eventhub.models.booking import ACTIVE_BOOKING_STATUSES
from eventhub.models.profile import Role
from eventhub.services import events_service
from eventhub.services.bookings_service import Ticket
from eventhub.services.common import require_role

RECENT_ORDERS_LIMIT = 5
ATTENDEE_HOME_LIMIT = 3


@dataclass(frozen=True)
class RecentOrder:
    id: uuid.UUID
    event_name: str
    customer_name: str
    amount: float
    status: str
    date: datetime


@dataclass(frozen=True)
class AttendeeHome:
    upcoming: list[Ticket]
    recommended: list[events_service.EventView]


def load_snapshot(db: Session, organizer_id: uuid.UUID) -> tuple[list[EventSnapshot], list[BookingSnapshot]]:
    events = db.scalars(
        select(Event)
        .where(Event.organizer_id == organizer_id)
        .order_by(Event.created_at.asc())
    ).all()
    bookings = db.scalars(
        select(Booking)
        .join(Event, Event.id == Booking.event_id)
        .where(
            Event.organizer_id == organizer_id,
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        )
    ).all()

    return (
        [
            EventSnapshot(id=e.id, title=e.title, price=float(e.price or 0), category=e.category)
            for e in events
        ],
        [
            BookingSnapshot(
                id=b.id,
                event_id=b.event_id,
                attendee_id=b.attendee_id,
                booked_at=b.booking_date,
                status=b.status,
            )
            for b in bookings
        ],
    )


def recent_orders(db: Session, organizer_id: uuid.UUID, limit: int = RECENT_ORDERS_LIMIT) -> list[RecentOrder]:
    rows = db.execute(
        select(Booking, Event, Profile)
        .join(Event, Event.id == Booking.event_id)
        .join(Profile, Profile.id == Booking.attendee_id)
        .where(Event.organizer_id == organizer_id)
        .order_by(Booking.booking_date.desc())
        .limit(limit)
    ).all()
    return [
        RecentOrder(
            id=booking.id,
            event_name=event.title,
            customer_name=attendee.full_name,
            amount=float(event.price or 0),
            status=booking.status.value,
            date=booking.booking_date,
        )
        for booking, event, attendee in rows
    ]


def organizer_overview(
    db: Session, caller: Profile, now: datetime | None = None
) -> tuple[dashboard.Overview, list[RecentOrder]]:
    require_role(caller, Role.ORGANIZER, "view the organizer dashboard")
    events, bookings = load_snapshot(db, caller.id)
    overview = dashboard.build_overview(
        events, bookings, months=settings.dashboard_trend_months, now=now
    )
    return overview, recent_orders(db, caller.id)


def organizer_analysis(db: Session, caller: Profile, now: datetime | None = None) -> dashboard.Analysis:
    require_role(caller, Role.ORGANIZER, "view analytics")
    events, bookings = load_snapshot(db, caller.id)
    return dashboard.build_analysis(
        events, bookings, months=settings.dashboard_trend_months, now=now
    )


def attendee_home(db: Session, caller: Profile, now: datetime | None = None) -> AttendeeHome:
    require_role(caller, Role.ATTENDEE, "view the attendee dashboard")
    now = now or datetime.now(timezone.utc)

    rows = db.execute(
        select(Booking, Event)
        .join(Event, Event.id == Booking.event_id)
        .where(Booking.attendee_id == caller.id)
        .order_by(Event.date_time.asc())
    ).all()
    booked_ids = [event.id for _, event in rows]
    upcoming = [
        Ticket(booking=booking, event=event) for booking, event in rows if event.date_time >= now
    ][:ATTENDEE_HOME_LIMIT]

    recommended = events_service.upcoming_published_events(
        db, now, exclude_ids=booked_ids, limit=ATTENDEE_HOME_LIMIT
    )
    return AttendeeHome(upcoming=upcoming, recommended=recommended)
