from __future__ import annotations

import uuid
from datetime import datetime, timezone

import pytest

from eventhub.core.config import Settings
from eventhub.domain import dashboard
from eventhub.domain.dashboard import BookingSnapshot, EventSnapshot
from eventhub.models.booking import BookingStatus

NOW = datetime(2024, 10, 15, 12, 0, tzinfo=timezone.utc)


def _event(title: str, price: float = 0.0, category: str | None = None) -> EventSnapshot:
    return EventSnapshot(id=uuid.uuid4(), title=title, price=price, category=category)


def _booking(event: EventSnapshot, attendee_id=None, booked_at=NOW, **kwargs) -> BookingSnapshot:
    return BookingSnapshot(
        id=uuid.uuid4(),
        event_id=event.id,
        attendee_id=attendee_id or uuid.uuid4(),
        booked_at=booked_at,
        **kwargs,
    )


def test_revenue_and_tickets_sum_over_bookings():
    paid = _event("Paid", price=20)
    free = _event("Free", price=0)
    bookings = [_booking(paid), _booking(paid), _booking(free)]

    overview = dashboard.build_overview([paid, free], bookings, now=NOW)

    assert overview.total_revenue == 40
    assert overview.tickets_sold == 3
    assert overview.total_attendees == 3


def test_total_attendees_counts_distinct_people():
    a = _event("A", price=5)
    b = _event("B", price=5)
    person = uuid.uuid4()
    bookings = [_booking(a, attendee_id=person), _booking(b, attendee_id=person)]

    assert dashboard.tickets_sold(bookings) == 2
    assert dashboard.total_attendees(bookings) == 1


def test_cancelled_bookings_are_ignored():
    event = _event("A", price=10)
    bookings = [_booking(event), _booking(event, status=BookingStatus.CANCELLED)]

    assert dashboard.total_revenue([event], bookings) == 10
    assert dashboard.tickets_sold(bookings) == 1


def test_checked_in_bookings_count_as_sold():
    event = _event("A", price=10)
    bookings = [_booking(event, status=BookingStatus.CHECKED_IN)]

    assert dashboard.tickets_sold(bookings) == 1
    assert dashboard.total_revenue([event], bookings) == 10


def test_avg_attendance_rate_with_no_events_is_zero():
    assert dashboard.avg_attendance_rate(0, 0) == 0.0
    assert dashboard.avg_attendance_rate(5, 0) == 0.0


def test_avg_attendance_rate_is_bookings_per_event_percent():
    assert dashboard.avg_attendance_rate(3, 2) == 150.0


def test_trend_has_six_months_with_zero_fill():
    event = _event("A", price=15)
    bookings = [
        _booking(event, booked_at=datetime(2024, 10, 1, tzinfo=timezone.utc)),
        _booking(event, booked_at=datetime(2024, 8, 20, tzinfo=timezone.utc)),
        # Outside the window
        _booking(event, booked_at=datetime(2024, 3, 31, tzinfo=timezone.utc)),
    ]

    trend = dashboard.monthly_trend(bookings, [event], months=6, now=NOW)

    assert [p.month for p in trend] == [
        "2024-05",
        "2024-06",
        "2024-07",
        "2024-08",
        "2024-09",
        "2024-10",
    ]
    assert [p.label for p in trend] == ["May", "Jun", "Jul", "Aug", "Sep", "Oct"]
    assert [p.value for p in trend] == [0, 0, 0, 1, 0, 1]

    revenue = dashboard.monthly_trend(bookings, [event], months=6, metric="revenue", now=NOW)
    assert [p.value for p in revenue] == [0, 0, 0, 15, 0, 15]


def test_trend_window_crosses_year_boundary():
    now = datetime(2025, 2, 10, tzinfo=timezone.utc)
    event = _event("A")
    bookings = [_booking(event, booked_at=datetime(2024, 12, 24, tzinfo=timezone.utc))]

    trend = dashboard.monthly_trend(bookings, months=6, now=now)

    assert len(trend) == 6
    assert trend[0].month == "2024-09"
    assert trend[-1].month == "2025-02"
    assert {p.month: p.value for p in trend}["2024-12"] == 1


def test_trend_with_no_bookings_is_all_zero():
    trend = dashboard.monthly_trend([], months=6, now=NOW)
    assert len(trend) == 6
    assert all(p.value == 0 for p in trend)


def test_most_popular_event_tie_keeps_first_event():
    first = _event("First")
    second = _event("Second")
    bookings = [_booking(second), _booking(first)]

    assert dashboard.most_popular_event([first, second], bookings) == first


def test_most_popular_event_picks_highest_count():
    first = _event("First")
    second = _event("Second")
    bookings = [_booking(second), _booking(second), _booking(first)]

    assert dashboard.most_popular_event([first, second], bookings) == second


def test_analysis_without_events_reports_na():
    analysis = dashboard.build_analysis([], [], now=NOW)

    assert analysis.most_popular_event == "N/A"
    assert analysis.avg_attendance_rate == 0.0
    assert analysis.total_events == 0
    assert len(analysis.bookings_trend) == 6


def test_category_distribution_groups_missing_category():
    events = [
        _event("A", category="Music"),
        _event("B", category=None),
        _event("C", category="Music"),
        _event("D", category="  "),
    ]

    distribution = dashboard.category_distribution(events)

    assert [(c.name, c.value) for c in distribution] == [("Music", 2), ("Uncategorized", 2)]


def test_event_attendance_truncates_names_and_limits_events():
    events = [_event(f"A very long event title {i}") for i in range(12)]
    bookings = [_booking(events[0]), _booking(events[0])]

    rows = dashboard.event_attendance(events, bookings)

    assert len(rows) == 10
    assert rows[0].name == "A very long eve"
    assert rows[0].attendance == 2
    assert rows[1].attendance == 0


def test_revenue_weights_bookings_by_event_price():
    cheap = _event("Cheap", price=10)
    pricey = _event("Pricey", price=20)
    bookings = [_booking(cheap), _booking(cheap), _booking(pricey)]

    assert dashboard.total_revenue([cheap, pricey], bookings) == 40
    assert dashboard.tickets_sold(bookings) == 3


def test_trend_window_must_cover_at_least_one_month():
    with pytest.raises(ValueError):
        dashboard.monthly_trend([], months=0, now=NOW)
    with pytest.raises(ValueError):
        dashboard.trailing_months(-2, NOW)


def test_settings_reject_empty_trend_window():
    with pytest.raises(ValueError):
        Settings(dashboard_trend_months=0)

    assert Settings(dashboard_trend_months=1).dashboard_trend_months == 1
