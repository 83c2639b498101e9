from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventhub.domain import capacity
from eventhub.models import Event
from eventhub.models.event import EventStatus


def _ensure_tzaware(value: datetime | None) -> datetime | None:
    if value is None:
        return value
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        raise ValueError("datetime must be timezone-aware")
    return value


class SchemaBase(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")


class TZAwareMixin(BaseModel):
    @field_validator("date_time", mode="after", check_fields=False)
    @classmethod
    def _validate_tzaware(cls, value: datetime | None) -> datetime | None:
        return _ensure_tzaware(value)


class EventCreate(TZAwareMixin, SchemaBase):
    title: str
    description: str | None = None
    venue: str
    date_time: datetime
    capacity: int = Field(ge=1)
    category: str | None = None
    banner_url: str | None = None
    price: float = Field(default=0, ge=0)
    status: EventStatus | None = None


class EventUpdate(TZAwareMixin, SchemaBase):
    title: str | None = None
    description: str | None = None
    venue: str | None = None
    date_time: datetime | None = None
    capacity: int | None = Field(default=None, ge=1)
    category: str | None = None
    banner_url: str | None = None
    price: float | None = Field(default=None, ge=0)
    status: EventStatus | None = None


class EventOut(SchemaBase):
    id: UUID
    organizer_id: UUID
    title: str
    description: str | None = None
    venue: str
    date_time: datetime
    capacity: int
    category: str | None = None
    banner_url: str | None = None
    price: float
    status: EventStatus
    created_at: datetime
    updated_at: datetime
    bookings_count: int = 0
    available_seats: int
    is_full: bool

    @classmethod
    def build(cls, event: Event, bookings_count: int, **extra):
        return cls.model_validate(
            {
                **{name: getattr(event, name) for name in _EVENT_FIELDS},
                "bookings_count": bookings_count,
                # Over-filled events show zero seats, never a negative number.
                "available_seats": capacity.displayed_seats(event.capacity, bookings_count),
                "is_full": capacity.is_full(event.capacity, bookings_count),
                **extra,
            }
        )


_EVENT_FIELDS = (
    "id",
    "organizer_id",
    "title",
    "description",
    "venue",
    "date_time",
    "capacity",
    "category",
    "banner_url",
    "price",
    "status",
    "created_at",
    "updated_at",
)


class EventListOut(SchemaBase):
    items: list[EventOut]
    total: int = Field(ge=0)


class ViewerBookingOut(SchemaBase):
    id: UUID
    status: str
    booking_date: datetime


class EventDetailOut(EventOut):
    is_owner: bool = False
    my_booking: ViewerBookingOut | None = None
    my_application_status: str | None = None


class EventSummaryOut(SchemaBase):
    id: UUID
    title: str
    venue: str
    date_time: datetime
    price: float
    status: EventStatus
