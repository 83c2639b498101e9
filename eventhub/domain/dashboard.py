"""Organizer dashboard aggregates.

Everything here is a pure function over a snapshot of one organizer's events
and bookings, so it can be computed and tested without a store. Loading the
snapshot lives in ``analytics_service``.
"""

from __future__ import annotations

import uuid
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

from eventhub.models.base import as_utc
from eventhub.models.booking import ACTIVE_BOOKING_STATUSES, BookingStatus

UNCATEGORIZED = "Uncategorized"
DEFAULT_TREND_MONTHS = 6
ATTENDANCE_EVENT_LIMIT = 10
ATTENDANCE_NAME_LENGTH = 15

_MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

TrendMetric = Literal["count", "revenue"]


@dataclass(frozen=True)
class EventSnapshot:
    id: uuid.UUID
    title: str
    price: float = 0.0
    category: str | None = None


@dataclass(frozen=True)
class BookingSnapshot:
    id: uuid.UUID
    event_id: uuid.UUID
    attendee_id: uuid.UUID
    booked_at: datetime
    status: BookingStatus = BookingStatus.CONFIRMED


@dataclass(frozen=True)
class TrendPoint:
    month: str
    label: str
    value: float


@dataclass(frozen=True)
class CategoryCount:
    name: str
    value: int


@dataclass(frozen=True)
class EventAttendance:
    event_id: uuid.UUID
    name: str
    attendance: int


@dataclass(frozen=True)
class Overview:
    total_revenue: float
    tickets_sold: int
    total_attendees: int
    sales_trend: list[TrendPoint] = field(default_factory=list)


@dataclass(frozen=True)
class Analysis:
    bookings_trend: list[TrendPoint]
    event_attendance: list[EventAttendance]
    category_distribution: list[CategoryCount]
    avg_attendance_rate: float
    most_popular_event: str
    total_revenue: float
    total_events: int


def _active(bookings: Sequence[BookingSnapshot]) -> list[BookingSnapshot]:
    return [b for b in bookings if b.status in ACTIVE_BOOKING_STATUSES]


def _prices(events: Sequence[EventSnapshot]) -> dict[uuid.UUID, float]:
    return {e.id: float(e.price or 0) for e in events}


def total_revenue(events: Sequence[EventSnapshot], bookings: Sequence[BookingSnapshot]) -> float:
    prices = _prices(events)
    return sum(prices.get(b.event_id, 0.0) for b in _active(bookings))


def tickets_sold(bookings: Sequence[BookingSnapshot]) -> int:
    return len(_active(bookings))


def total_attendees(bookings: Sequence[BookingSnapshot]) -> int:
    return len({b.attendee_id for b in _active(bookings)})


def trailing_months(months: int, now: datetime | None = None) -> list[tuple[int, int]]:
    """(year, month) pairs for the trailing window, oldest first, current month last."""
    if months < 1:
        raise ValueError("months must be at least 1")
    current = as_utc(now) if now else datetime.now(timezone.utc)
    index = current.year * 12 + (current.month - 1)
    return [divmod(i, 12) for i in range(index - months + 1, index + 1)]


def monthly_trend(
    bookings: Sequence[BookingSnapshot],
    events: Sequence[EventSnapshot] = (),
    *,
    months: int = DEFAULT_TREND_MONTHS,
    metric: TrendMetric = "count",
    now: datetime | None = None,
) -> list[TrendPoint]:
    window = trailing_months(months, now)
    buckets: dict[tuple[int, int], float] = {key: 0 for key in window}
    prices = _prices(events)

    for booking in _active(bookings):
        booked_at = as_utc(booking.booked_at)
        key = (booked_at.year, booked_at.month - 1)
        if key not in buckets:
            continue
        if metric == "revenue":
            buckets[key] += prices.get(booking.event_id, 0.0)
        else:
            buckets[key] += 1

    return [
        TrendPoint(
            month=f"{year:04d}-{month0 + 1:02d}",
            label=_MONTH_LABELS[month0],
            value=buckets[(year, month0)],
        )
        for year, month0 in window
    ]


def booking_counts(bookings: Sequence[BookingSnapshot]) -> Counter[uuid.UUID]:
    return Counter(b.event_id for b in _active(bookings))


def most_popular_event(
    events: Sequence[EventSnapshot], bookings: Sequence[BookingSnapshot]
) -> EventSnapshot | None:
    """Event with the most bookings; ties keep the earliest event in ``events``."""
    counts = booking_counts(bookings)
    best: EventSnapshot | None = None
    best_count = -1
    for event in events:
        count = counts.get(event.id, 0)
        if count > best_count:
            best, best_count = event, count
    return best


def avg_attendance_rate(total_bookings: int, total_events: int) -> float:
    if total_events <= 0:
        return 0.0
    return (total_bookings / total_events) * 100


def category_distribution(events: Sequence[EventSnapshot]) -> list[CategoryCount]:
    counts: dict[str, int] = {}
    for event in events:
        name = (event.category or "").strip() or UNCATEGORIZED
        counts[name] = counts.get(name, 0) + 1
    return [CategoryCount(name=name, value=value) for name, value in counts.items()]


def event_attendance(
    events: Sequence[EventSnapshot],
    bookings: Sequence[BookingSnapshot],
    limit: int = ATTENDANCE_EVENT_LIMIT,
) -> list[EventAttendance]:
    counts = booking_counts(bookings)
    return [
        EventAttendance(
            event_id=event.id,
            name=event.title[:ATTENDANCE_NAME_LENGTH],
            attendance=counts.get(event.id, 0),
        )
        for event in events[:limit]
    ]


def build_overview(
    events: Sequence[EventSnapshot],
    bookings: Sequence[BookingSnapshot],
    *,
    months: int = DEFAULT_TREND_MONTHS,
    now: datetime | None = None,
) -> Overview:
    return Overview(
        total_revenue=total_revenue(events, bookings),
        tickets_sold=tickets_sold(bookings),
        total_attendees=total_attendees(bookings),
        sales_trend=monthly_trend(bookings, events, months=months, metric="revenue", now=now),
    )


def build_analysis(
    events: Sequence[EventSnapshot],
    bookings: Sequence[BookingSnapshot],
    *,
    months: int = DEFAULT_TREND_MONTHS,
    now: datetime | None = None,
) -> Analysis:
    popular = most_popular_event(events, bookings)
    return Analysis(
        bookings_trend=monthly_trend(bookings, events, months=months, metric="count", now=now),
        event_attendance=event_attendance(events, bookings),
        category_distribution=category_distribution(events),
        avg_attendance_rate=avg_attendance_rate(tickets_sold(bookings), len(events)),
        most_popular_event=popular.title if popular else "N/A",
        total_revenue=total_revenue(events, bookings),
        total_events=len(events),
    )
