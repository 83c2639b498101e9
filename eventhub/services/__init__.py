from eventhub.services.applications_service import (
    apply_to_event,
    decide_application,
    list_event_applications,
    list_my_applications,
)
from eventhub.services.bookings_service import (
    cancel_booking,
    create_booking,
    list_event_bookings,
    list_my_bookings,
)
from eventhub.services.events_service import (
    create_event,
    delete_event,
    get_event_details,
    list_categories,
    list_organizer_events,
    list_published_events,
    update_event,
)
from eventhub.services.profiles_service import get_profile, register_profile, update_profile

__all__ = [
    "create_event",
    "update_event",
    "delete_event",
    "get_event_details",
    "list_categories",
    "list_organizer_events",
    "list_published_events",
    "create_booking",
    "cancel_booking",
    "list_my_bookings",
    "list_event_bookings",
    "apply_to_event",
    "decide_application",
    "list_event_applications",
    "list_my_applications",
    "register_profile",
    "get_profile",
    "update_profile",
]
