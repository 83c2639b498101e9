from eventhub.api.v1.schemas.applications import (
    ApplicationCreate,
    ApplicationOut,
    DecisionIn,
    EventApplicationOut,
    MyApplicationOut,
)
from eventhub.api.v1.schemas.bookings import BookingOut, EventBookingOut, MyTicketsOut, TicketOut
from eventhub.api.v1.schemas.dashboard import (
    AttendeeHomeOut,
    OrganizerAnalysisOut,
    OrganizerOverviewOut,
)
from eventhub.api.v1.schemas.events import (
    EventCreate,
    EventDetailOut,
    EventListOut,
    EventOut,
    EventSummaryOut,
    EventUpdate,
)
from eventhub.api.v1.schemas.profiles import ProfileCreate, ProfileOut, ProfileUpdate

__all__ = [
    "EventCreate",
    "EventUpdate",
    "EventOut",
    "EventDetailOut",
    "EventListOut",
    "EventSummaryOut",
    "BookingOut",
    "TicketOut",
    "MyTicketsOut",
    "EventBookingOut",
    "ApplicationCreate",
    "ApplicationOut",
    "DecisionIn",
    "EventApplicationOut",
    "MyApplicationOut",
    "ProfileCreate",
    "ProfileOut",
    "ProfileUpdate",
    "AttendeeHomeOut",
    "OrganizerOverviewOut",
    "OrganizerAnalysisOut",
]
