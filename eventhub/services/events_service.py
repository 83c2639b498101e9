from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session

from eventhub.api.v1.schemas.events import EventCreate, EventUpdate
from eventhub.models import Booking, Event, Profile, VolunteerApplication
from eventhub.models.booking import ACTIVE_BOOKING_STATUSES
from eventhub.models.event import EventStatus
from eventhub.models.profile import Role
from eventhub.models.volunteer_application import ApplicationStatus
from eventhub.services.common import (
    active_booking_count,
    active_booking_counts,
    commit,
    get_event,
    require_event_owner,
    require_role,
)
from eventhub.services.error_codes import ErrorCode
from eventhub.services.exceptions import ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)

# Status changes are refused once an event reaches one of these.
LOCKED_STATUSES = {EventStatus.CANCELLED, EventStatus.COMPLETED}


@dataclass(frozen=True)
class EventView:
    event: Event
    bookings_count: int


@dataclass(frozen=True)
class EventDetails:
    event: Event
    bookings_count: int
    is_owner: bool = False
    my_booking: Booking | None = None
    my_application_status: ApplicationStatus | None = None


def _require_text(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(ErrorCode.VALIDATION_ERROR.value, f"{field} is required")
    return cleaned


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _validate_capacity(value: int | None) -> None:
    if value is None or value <= 0:
        raise ValidationError(ErrorCode.VALIDATION_ERROR.value, "capacity must be positive")


def _validate_price(value: float | None) -> None:
    if value is None or value < 0:
        raise ValidationError(ErrorCode.VALIDATION_ERROR.value, "price cannot be negative")


def _with_counts(db: Session, events: list[Event]) -> list[EventView]:
    counts = active_booking_counts(db, [e.id for e in events])
    return [EventView(event=e, bookings_count=counts.get(e.id, 0)) for e in events]


def _search_clause(search: str):
    like = f"%{search.strip().lower()}%"
    return or_(
        Event.title.ilike(like),
        Event.venue.ilike(like),
        Event.description.ilike(like),
    )


def create_event(db: Session, caller: Profile, payload: EventCreate) -> Event:
    require_role(caller, Role.ORGANIZER, "create events")

    title = _require_text(payload.title, "title")
    venue = _require_text(payload.venue, "venue")
    if payload.date_time is None:
        raise ValidationError(ErrorCode.VALIDATION_ERROR.value, "date_time is required")
    _validate_capacity(payload.capacity)
    _validate_price(payload.price)

    event = Event(
        organizer_id=caller.id,
        title=title,
        description=_optional_text(payload.description),
        venue=venue,
        date_time=payload.date_time,
        capacity=payload.capacity,
        category=_optional_text(payload.category),
        banner_url=_optional_text(payload.banner_url),
        price=payload.price,
        status=payload.status or EventStatus.PUBLISHED,
    )
    db.add(event)
    commit(db)
    db.refresh(event)

    logger.info("event_created", event_id=str(event.id), organizer_id=str(caller.id))
    return event


def update_event(db: Session, caller: Profile, event_id: Any, patch: EventUpdate) -> EventView:
    event = get_event(db, event_id, for_update=True)
    require_event_owner(caller, event)

    patch_data = patch.model_dump(exclude_unset=True)
    booked = active_booking_count(db, event.id)

    for field in ("title", "venue"):
        if field in patch_data:
            patch_data[field] = _require_text(patch_data[field], field)
    for field in ("description", "category", "banner_url"):
        if field in patch_data:
            patch_data[field] = _optional_text(patch_data[field])
    if "date_time" in patch_data and patch_data["date_time"] is None:
        raise ValidationError(ErrorCode.VALIDATION_ERROR.value, "date_time is required")

    if "capacity" in patch_data:
        _validate_capacity(patch_data["capacity"])
        if patch_data["capacity"] < booked:
            raise ConflictError(
                ErrorCode.CAPACITY_BELOW_BOOKINGS.value,
                "capacity cannot be below current booking count",
            )
    if "price" in patch_data:
        _validate_price(patch_data["price"])

    new_status = patch_data.get("status")
    if new_status is None:
        patch_data.pop("status", None)
    elif new_status != event.status and event.status in LOCKED_STATUSES:
        raise ConflictError(
            ErrorCode.EVENT_STATUS_LOCKED.value,
            f"cannot change status of a {event.status.value} event",
        )

    for key, value in patch_data.items():
        setattr(event, key, value)

    db.add(event)
    commit(db)
    db.refresh(event)
    return EventView(event=event, bookings_count=booked)


def delete_event(db: Session, caller: Profile, event_id: Any) -> None:
    event = get_event(db, event_id, for_update=True)
    require_event_owner(caller, event)

    db.execute(delete(Booking).where(Booking.event_id == event.id))
    db.execute(delete(VolunteerApplication).where(VolunteerApplication.event_id == event.id))
    db.delete(event)
    commit(db)

    logger.info("event_deleted", event_id=str(event.id), organizer_id=str(caller.id))


def list_published_events(
    db: Session,
    search: str | None = None,
    category: str | None = None,
    now: datetime | None = None,
) -> list[EventView]:
    now = now or datetime.now(timezone.utc)
    stmt = select(Event).where(
        Event.status == EventStatus.PUBLISHED,
        Event.date_time >= now,
    )
    if search and search.strip():
        stmt = stmt.where(_search_clause(search))
    if category and category.strip() and category != "all":
        stmt = stmt.where(Event.category == category.strip())
    events = list(db.scalars(stmt.order_by(Event.date_time.asc())).all())
    return _with_counts(db, events)


def list_categories(db: Session) -> list[str]:
    rows = db.scalars(
        select(Event.category)
        .where(Event.status == EventStatus.PUBLISHED, Event.category.is_not(None))
        .distinct()
        .order_by(Event.category)
    ).all()
    return [c for c in rows if c and c.strip()]


def list_organizer_events(
    db: Session,
    caller: Profile,
    status: EventStatus | None = None,
    search: str | None = None,
) -> list[EventView]:
    require_role(caller, Role.ORGANIZER, "list their events")

    stmt = select(Event).where(Event.organizer_id == caller.id)
    if status is not None:
        stmt = stmt.where(Event.status == status)
    if search and search.strip():
        stmt = stmt.where(_search_clause(search))
    events = list(db.scalars(stmt.order_by(Event.created_at.desc())).all())
    return _with_counts(db, events)


def get_event_details(db: Session, caller: Profile, event_id: Any) -> EventDetails:
    event = get_event(db, event_id)
    is_owner = event.organizer_id == caller.id

    # Drafts are visible to their organizer only.
    if event.status == EventStatus.DRAFT and not is_owner:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND.value, "event not found")

    count = active_booking_count(db, event.id)

    match caller.role:
        case Role.ATTENDEE:
            booking = db.scalar(
                select(Booking).where(
                    Booking.event_id == event.id,
                    Booking.attendee_id == caller.id,
                    Booking.status.in_(ACTIVE_BOOKING_STATUSES),
                )
            )
            return EventDetails(event=event, bookings_count=count, my_booking=booking)
        case Role.VOLUNTEER:
            status = db.scalar(
                select(VolunteerApplication.status).where(
                    VolunteerApplication.event_id == event.id,
                    VolunteerApplication.volunteer_id == caller.id,
                )
            )
            return EventDetails(event=event, bookings_count=count, my_application_status=status)
        case Role.ORGANIZER:
            return EventDetails(event=event, bookings_count=count, is_owner=is_owner)
        case _:
            raise ValueError(f"unhandled role: {caller.role!r}")


def upcoming_published_events(
    db: Session,
    now: datetime,
    exclude_ids: list | None = None,
    limit: int = 3,
) -> list[EventView]:
    stmt = select(Event).where(
        Event.status == EventStatus.PUBLISHED,
        Event.date_time >= now,
    )
    if exclude_ids:
        stmt = stmt.where(Event.id.not_in(exclude_ids))
    events = list(db.scalars(stmt.order_by(Event.created_at.desc()).limit(limit)).all())
    return _with_counts(db, events)
