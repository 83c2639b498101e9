from __future__ import annotations

from fastapi import APIRouter

from eventhub.api.errors import http_error_from_service
from eventhub.api.v1.deps import Dispatcher
from eventhub.api.v1.schemas.applications import (
    ApplicationCreate,
    ApplicationOut,
    DecisionIn,
    EventApplicationOut,
    MyApplicationOut,
)
from eventhub.auth.deps import CurrentProfile, DBSession
from eventhub.services import applications_service
from eventhub.services.exceptions import ServiceError

router = APIRouter(tags=["applications"])


@router.post("/events/{event_id}/applications", response_model=ApplicationOut, status_code=201)
def apply_to_event(
    event_id: str,
    profile: CurrentProfile,
    db: DBSession,
    payload: ApplicationCreate | None = None,
):
    notes = payload.notes if payload is not None else None
    try:
        return applications_service.apply_to_event(db, profile, event_id, notes=notes)
    except ServiceError as err:
        raise http_error_from_service(err) from None


@router.get("/events/{event_id}/applications", response_model=list[EventApplicationOut])
def list_event_applications(event_id: str, profile: CurrentProfile, db: DBSession):
    try:
        rows = applications_service.list_event_applications(db, profile, event_id)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return [
        EventApplicationOut(
            **ApplicationOut.model_validate(row.application).model_dump(),
            volunteer_name=row.volunteer.full_name,
            volunteer_email=row.volunteer.email,
        )
        for row in rows
    ]


@router.get("/applications/mine", response_model=list[MyApplicationOut])
def list_my_applications(profile: CurrentProfile, db: DBSession):
    try:
        rows = applications_service.list_my_applications(db, profile)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return [
        MyApplicationOut(
            **ApplicationOut.model_validate(row.application).model_dump(),
            event_title=row.event.title,
            event_date_time=row.event.date_time,
        )
        for row in rows
    ]


@router.post("/applications/{application_id}/decision", response_model=ApplicationOut)
def decide_application(
    application_id: str,
    payload: DecisionIn,
    profile: CurrentProfile,
    db: DBSession,
    dispatcher: Dispatcher,
):
    try:
        return applications_service.decide_application(
            db, profile, application_id, payload.decision, dispatcher
        )
    except ServiceError as err:
        raise http_error_from_service(err) from None
