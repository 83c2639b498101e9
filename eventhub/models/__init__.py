from eventhub.models.base import Base
from eventhub.models.booking import Booking
from eventhub.models.event import Event
from eventhub.models.profile import Profile
from eventhub.models.volunteer_application import VolunteerApplication

__all__ = ["Base", "Profile", "Event", "Booking", "VolunteerApplication"]
