from __future__ import annotations

import structlog
from sqlalchemy.orm import Session

from eventhub.api.v1.schemas.profiles import ProfileCreate, ProfileUpdate
from eventhub.auth.identity import Identity
from eventhub.models import Profile
from eventhub.services.common import commit
from eventhub.services.error_codes import ErrorCode
from eventhub.services.exceptions import ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


def _normalize_text(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    return normalized or None


def _normalize_items(values: list[str]) -> list[str]:
    normalized: list[str] = []
    seen: set[str] = set()
    for value in values:
        item = value.strip()
        if not item or item.lower() in seen:
            continue
        seen.add(item.lower())
        normalized.append(item)
    return normalized


def get_profile(db: Session, identity: Identity) -> Profile:
    profile = db.get(Profile, identity.id)
    if not profile:
        raise NotFoundError(ErrorCode.PROFILE_NOT_FOUND.value, "profile not found")
    return profile


def register_profile(db: Session, identity: Identity, payload: ProfileCreate) -> Profile:
    if db.get(Profile, identity.id) is not None:
        raise ConflictError(ErrorCode.PROFILE_ALREADY_EXISTS.value, "profile already exists")

    full_name = _normalize_text(payload.full_name)
    if not full_name:
        raise ValidationError(ErrorCode.VALIDATION_ERROR.value, "full_name is required")
    if not identity.email:
        raise ValidationError(ErrorCode.VALIDATION_ERROR.value, "identity has no email")

    profile = Profile(
        id=identity.id,
        email=identity.email.strip().lower(),
        full_name=full_name,
        role=payload.role,
        phone=_normalize_text(payload.phone),
        company=_normalize_text(payload.company),
        skills=_normalize_items(payload.skills),
    )
    db.add(profile)
    commit(db, conflict=ErrorCode.PROFILE_ALREADY_EXISTS, message="profile already exists")
    db.refresh(profile)

    logger.info("profile_registered", profile_id=str(profile.id), role=profile.role.value)
    return profile


def update_profile(db: Session, caller: Profile, patch: ProfileUpdate) -> Profile:
    updates = patch.model_dump(exclude_unset=True)

    if "full_name" in updates:
        full_name = _normalize_text(updates["full_name"])
        if not full_name:
            raise ValidationError(ErrorCode.VALIDATION_ERROR.value, "full_name cannot be blank")
        caller.full_name = full_name
    for field in ("phone", "company"):
        if field in updates:
            setattr(caller, field, _normalize_text(updates[field]))
    if "skills" in updates:
        caller.skills = _normalize_items(updates["skills"] or [])

    db.add(caller)
    commit(db)
    db.refresh(caller)
    return caller
