from __future__ import annotations

from datetime import datetime
from uuid import UUID

from eventhub.api.v1.schemas.bookings import TicketOut
from eventhub.api.v1.schemas.events import EventOut, SchemaBase


class TrendPointOut(SchemaBase):
    month: str
    label: str
    value: float


class CategoryCountOut(SchemaBase):
    name: str
    value: int


class EventAttendanceOut(SchemaBase):
    event_id: UUID
    name: str
    attendance: int


class RecentOrderOut(SchemaBase):
    id: UUID
    event_name: str
    customer_name: str
    amount: float
    status: str
    date: datetime


class OrganizerOverviewOut(SchemaBase):
    total_revenue: float
    tickets_sold: int
    total_attendees: int
    sales_trend: list[TrendPointOut]
    recent_orders: list[RecentOrderOut]


class OrganizerAnalysisOut(SchemaBase):
    bookings_trend: list[TrendPointOut]
    event_attendance: list[EventAttendanceOut]
    category_distribution: list[CategoryCountOut]
    avg_attendance_rate: float
    most_popular_event: str
    total_revenue: float
    total_events: int


class AttendeeHomeOut(SchemaBase):
    upcoming: list[TicketOut]
    recommended: list[EventOut]
