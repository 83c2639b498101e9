from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

import sqlalchemy as sa
from sqlalchemy import ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from eventhub.models.base import Base, TimestampMixin, UTCDateTime, UUIDPrimaryKeyMixin, utcnow


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    # Never persisted: cancelling deletes the row.
    CANCELLED = "cancelled"
    CHECKED_IN = "checked_in"


ACTIVE_BOOKING_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN)

_ACTIVE_ONLY = sa.text("status IN ('confirmed', 'checked_in')")


class Booking(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "bookings"
    __table_args__ = (
        sa.Index(
            "uq_bookings_active_event_attendee",
            "event_id",
            "attendee_id",
            unique=True,
            postgresql_where=_ACTIVE_ONLY,
            sqlite_where=_ACTIVE_ONLY,
        ),
        sa.Index("ix_bookings_event_id_status", "event_id", "status"),
    )

    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    )
    attendee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[BookingStatus] = mapped_column(
        sa.Enum(
            BookingStatus,
            name="booking_status",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=BookingStatus.CONFIRMED,
    )
    booking_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    check_in_time: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
