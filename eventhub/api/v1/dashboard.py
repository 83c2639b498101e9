from __future__ import annotations

from fastapi import APIRouter

from eventhub.api.errors import http_error_from_service
from eventhub.api.v1.bookings import ticket_out
from eventhub.api.v1.schemas.dashboard import (
    AttendeeHomeOut,
    OrganizerAnalysisOut,
    OrganizerOverviewOut,
    RecentOrderOut,
    TrendPointOut,
)
from eventhub.api.v1.schemas.events import EventOut
from eventhub.auth.deps import CurrentProfile, DBSession
from eventhub.services import analytics_service
from eventhub.services.exceptions import ServiceError

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/attendee", response_model=AttendeeHomeOut)
def attendee_home(profile: CurrentProfile, db: DBSession):
    try:
        home = analytics_service.attendee_home(db, profile)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return AttendeeHomeOut(
        upcoming=[ticket_out(t) for t in home.upcoming],
        recommended=[EventOut.build(v.event, v.bookings_count) for v in home.recommended],
    )


@router.get("/organizer", response_model=OrganizerOverviewOut)
def organizer_overview(profile: CurrentProfile, db: DBSession):
    try:
        overview, orders = analytics_service.organizer_overview(db, profile)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return OrganizerOverviewOut(
        total_revenue=overview.total_revenue,
        tickets_sold=overview.tickets_sold,
        total_attendees=overview.total_attendees,
        sales_trend=[TrendPointOut.model_validate(p) for p in overview.sales_trend],
        recent_orders=[RecentOrderOut.model_validate(o) for o in orders],
    )


@router.get("/organizer/analysis", response_model=OrganizerAnalysisOut)
def organizer_analysis(profile: CurrentProfile, db: DBSession):
    try:
        analysis = analytics_service.organizer_analysis(db, profile)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return OrganizerAnalysisOut.model_validate(analysis)
