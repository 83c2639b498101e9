from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from eventhub.api.v1.schemas.events import SchemaBase
from eventhub.models.volunteer_application import ApplicationStatus


class ApplicationCreate(SchemaBase):
    notes: str | None = Field(default=None, max_length=2000)


class DecisionIn(SchemaBase):
    decision: ApplicationStatus


class ApplicationOut(SchemaBase):
    id: UUID
    event_id: UUID
    volunteer_id: UUID
    status: ApplicationStatus
    notes: str | None = None
    created_at: datetime
    decided_at: datetime | None = None


class EventApplicationOut(ApplicationOut):
    volunteer_name: str
    volunteer_email: str


class MyApplicationOut(ApplicationOut):
    event_title: str
    event_date_time: datetime
