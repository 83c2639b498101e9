from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from eventhub.models.event import EventStatus
from eventhub.models.profile import Role
from eventhub.services import bookings_service
from tests.factories import auth_headers, make_event, make_profile

ORG = auth_headers("org@example.com")
ANN = auth_headers("ann@example.com")


def test_organizer_overview_totals(client: TestClient, db_session, organizer, attendee):
    paid = make_event(db_session, organizer, title="Paid", price=20)
    free = make_event(db_session, organizer, title="Free", price=0)
    bob = make_profile(db_session, "bob@example.com", Role.ATTENDEE, "Bob")
    bookings_service.create_booking(db_session, attendee, paid.id)
    bookings_service.create_booking(db_session, bob, paid.id)
    bookings_service.create_booking(db_session, attendee, free.id)

    resp = client.get("/v1/dashboard/organizer", headers=ORG)

    assert resp.status_code == 200
    body = resp.json()
    assert body["total_revenue"] == 40
    assert body["tickets_sold"] == 3
    assert body["total_attendees"] == 2
    assert len(body["sales_trend"]) == 6
    assert body["sales_trend"][-1]["value"] == 40
    assert len(body["recent_orders"]) == 3
    assert {o["customer_name"] for o in body["recent_orders"]} == {"Ann Attendee", "Bob"}


def test_organizer_analysis(client: TestClient, db_session, organizer, attendee):
    first = make_event(db_session, organizer, title="First", category=None)
    make_event(db_session, organizer, title="Second", category="Music")
    bookings_service.create_booking(db_session, attendee, first.id)

    body = client.get("/v1/dashboard/organizer/analysis", headers=ORG).json()

    assert body["total_events"] == 2
    assert body["avg_attendance_rate"] == 50.0
    assert body["most_popular_event"] == "First"
    assert {c["name"] for c in body["category_distribution"]} == {"Uncategorized", "Music"}
    assert [row["attendance"] for row in body["event_attendance"]] == [1, 0]


def test_analysis_without_events(client: TestClient, organizer):
    body = client.get("/v1/dashboard/organizer/analysis", headers=ORG).json()

    assert body["total_events"] == 0
    assert body["avg_attendance_rate"] == 0.0
    assert body["most_popular_event"] == "N/A"
    assert len(body["bookings_trend"]) == 6


def test_dashboards_are_role_gated(client: TestClient, organizer, attendee):
    assert client.get("/v1/dashboard/organizer", headers=ANN).status_code == 403
    assert client.get("/v1/dashboard/attendee", headers=ORG).status_code == 403


def test_attendee_home(client: TestClient, db_session, organizer, attendee):
    now = datetime.now(timezone.utc)
    booked = make_event(db_session, organizer, title="Booked", date_time=now + timedelta(days=2))
    make_event(db_session, organizer, title="Suggested", date_time=now + timedelta(days=5))
    make_event(db_session, organizer, title="Past", date_time=now - timedelta(days=5))
    make_event(db_session, organizer, title="Hidden", status=EventStatus.DRAFT)
    bookings_service.create_booking(db_session, attendee, booked.id)

    body = client.get("/v1/dashboard/attendee", headers=ANN).json()

    assert [t["event"]["title"] for t in body["upcoming"]] == ["Booked"]
    assert [e["title"] for e in body["recommended"]] == ["Suggested"]
