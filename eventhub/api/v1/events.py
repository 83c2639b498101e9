from __future__ import annotations

from fastapi import APIRouter, Query, Response

from eventhub.api.errors import http_error_from_service
from eventhub.api.v1.schemas.bookings import BookingOut
from eventhub.api.v1.schemas.events import (
    EventCreate,
    EventDetailOut,
    EventListOut,
    EventOut,
    EventUpdate,
    ViewerBookingOut,
)
from eventhub.auth.deps import CurrentProfile, DBSession
from eventhub.models.event import EventStatus
from eventhub.services import events_service
from eventhub.services.events_service import EventView
from eventhub.services.exceptions import ServiceError

router = APIRouter(prefix="/events", tags=["events"])


def _list_out(views: list[EventView]) -> EventListOut:
    return EventListOut(
        items=[EventOut.build(v.event, v.bookings_count) for v in views],
        total=len(views),
    )


@router.get("", response_model=EventListOut)
def browse_events(
    profile: CurrentProfile,
    db: DBSession,
    q: str | None = Query(default=None, max_length=200),
    category: str | None = Query(default=None, max_length=100),
):
    return _list_out(events_service.list_published_events(db, search=q, category=category))


@router.get("/categories", response_model=list[str])
def list_categories(profile: CurrentProfile, db: DBSession):
    return events_service.list_categories(db)


@router.get("/mine", response_model=EventListOut)
def list_my_events(
    profile: CurrentProfile,
    db: DBSession,
    status: EventStatus | None = None,
    q: str | None = Query(default=None, max_length=200),
):
    try:
        views = events_service.list_organizer_events(db, profile, status=status, search=q)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return _list_out(views)


@router.post("", response_model=EventOut, status_code=201)
def create_event(payload: EventCreate, profile: CurrentProfile, db: DBSession):
    try:
        event = events_service.create_event(db, profile, payload)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return EventOut.build(event, 0)


@router.get("/{event_id}", response_model=EventDetailOut)
def get_event(event_id: str, profile: CurrentProfile, db: DBSession):
    try:
        details = events_service.get_event_details(db, profile, event_id)
    except ServiceError as err:
        raise http_error_from_service(err) from None

    my_booking = None
    if details.my_booking is not None:
        booking = BookingOut.model_validate(details.my_booking)
        my_booking = ViewerBookingOut(
            id=booking.id,
            status=booking.status.value,
            booking_date=booking.booking_date,
        )
    return EventDetailOut.build(
        details.event,
        details.bookings_count,
        is_owner=details.is_owner,
        my_booking=my_booking,
        my_application_status=(
            details.my_application_status.value if details.my_application_status else None
        ),
    )


@router.patch("/{event_id}", response_model=EventOut)
def update_event(event_id: str, payload: EventUpdate, profile: CurrentProfile, db: DBSession):
    try:
        view = events_service.update_event(db, profile, event_id, payload)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return EventOut.build(view.event, view.bookings_count)


@router.delete("/{event_id}", status_code=204)
def delete_event(event_id: str, profile: CurrentProfile, db: DBSession):
    try:
        events_service.delete_event(db, profile, event_id)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return Response(status_code=204)
