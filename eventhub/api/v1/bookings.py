from __future__ import annotations

from fastapi import APIRouter, Response

from eventhub.api.errors import http_error_from_service
from eventhub.api.v1.schemas.bookings import BookingOut, EventBookingOut, MyTicketsOut, TicketOut
from eventhub.api.v1.schemas.events import EventSummaryOut
from eventhub.auth.deps import CurrentProfile, DBSession
from eventhub.services import bookings_service
from eventhub.services.bookings_service import Ticket
from eventhub.services.exceptions import ServiceError

router = APIRouter(tags=["bookings"])


def ticket_out(ticket: Ticket) -> TicketOut:
    booking = BookingOut.model_validate(ticket.booking)
    return TicketOut(**booking.model_dump(), event=EventSummaryOut.model_validate(ticket.event))


@router.post("/events/{event_id}/bookings", response_model=BookingOut, status_code=201)
def book_event(event_id: str, profile: CurrentProfile, db: DBSession):
    try:
        return bookings_service.create_booking(db, profile, event_id)
    except ServiceError as err:
        raise http_error_from_service(err) from None


@router.get("/events/{event_id}/bookings", response_model=list[EventBookingOut])
def list_event_bookings(event_id: str, profile: CurrentProfile, db: DBSession):
    try:
        rows = bookings_service.list_event_bookings(db, profile, event_id)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return [
        EventBookingOut(
            **BookingOut.model_validate(row.booking).model_dump(),
            attendee_name=row.attendee.full_name,
            attendee_email=row.attendee.email,
        )
        for row in rows
    ]


@router.get("/bookings/mine", response_model=MyTicketsOut)
def list_my_bookings(profile: CurrentProfile, db: DBSession):
    try:
        tickets = bookings_service.list_my_bookings(db, profile)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return MyTicketsOut(
        upcoming=[ticket_out(t) for t in tickets.upcoming],
        past=[ticket_out(t) for t in tickets.past],
    )


@router.delete("/bookings/{booking_id}", status_code=204)
def cancel_booking(booking_id: str, profile: CurrentProfile, db: DBSession):
    try:
        bookings_service.cancel_booking(db, profile, booking_id)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return Response(status_code=204)
