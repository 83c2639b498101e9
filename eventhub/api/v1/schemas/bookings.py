from __future__ import annotations

from datetime import datetime
from uuid import UUID

from eventhub.api.v1.schemas.events import EventSummaryOut, SchemaBase
from eventhub.models.booking import BookingStatus


class BookingOut(SchemaBase):
    id: UUID
    event_id: UUID
    attendee_id: UUID
    status: BookingStatus
    booking_date: datetime
    check_in_time: datetime | None = None


class TicketOut(BookingOut):
    event: EventSummaryOut


class MyTicketsOut(SchemaBase):
    upcoming: list[TicketOut]
    past: list[TicketOut]


class EventBookingOut(BookingOut):
    attendee_name: str
    attendee_email: str
