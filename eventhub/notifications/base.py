from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from eventhub.models.volunteer_application import ApplicationStatus


class NotificationDispatcher(ABC):
    @abstractmethod
    def dispatch(self, application_id: uuid.UUID, decision: ApplicationStatus) -> None:
        """Hand a volunteer application decision off for delivery to the volunteer."""
