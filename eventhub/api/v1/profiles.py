from __future__ import annotations

from fastapi import APIRouter

from eventhub.api.errors import http_error_from_service
from eventhub.api.v1.schemas.profiles import ProfileCreate, ProfileOut, ProfileUpdate
from eventhub.auth.deps import CurrentIdentity, CurrentProfile, DBSession
from eventhub.services import profiles_service
from eventhub.services.exceptions import ServiceError

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post("", response_model=ProfileOut, status_code=201)
def register_profile(payload: ProfileCreate, identity: CurrentIdentity, db: DBSession):
    try:
        return profiles_service.register_profile(db, identity, payload)
    except ServiceError as err:
        raise http_error_from_service(err) from None


@router.get("/me", response_model=ProfileOut)
def get_my_profile(profile: CurrentProfile):
    return profile


@router.patch("/me", response_model=ProfileOut)
def update_my_profile(payload: ProfileUpdate, profile: CurrentProfile, db: DBSession):
    try:
        return profiles_service.update_profile(db, profile, payload)
    except ServiceError as err:
        raise http_error_from_service(err) from None
