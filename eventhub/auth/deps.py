from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from eventhub.auth.identity import Identity, dev_identity
from eventhub.auth.jwt import verify_access_token
from eventhub.core.config import settings
from eventhub.db import get_db
from eventhub.models import Profile
from eventhub.services import profiles_service
from eventhub.services.exceptions import NotFoundError

DBSession = Annotated[Session, Depends(get_db)]


def _unauthorized(detail: str = "unauthorized") -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_identity(request: Request) -> Identity:
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        raise _unauthorized("missing bearer token")

    token = auth.removeprefix("Bearer ").strip()

    if settings.auth_mode == "jwt":
        try:
            identity = verify_access_token(token)
        except ValueError as exc:
            raise _unauthorized(str(exc)) from None
    elif settings.auth_mode == "dev" and settings.env == "local":
        prefix = settings.dev_auth_prefix
        if not token.startswith(prefix):
            raise _unauthorized(f"invalid dev token (expected prefix {prefix})")

        email = token.removeprefix(prefix).strip()
        if "@" not in email:
            raise _unauthorized("invalid email in token")
        identity = dev_identity(email)
    else:
        raise _unauthorized("auth not configured")

    structlog.contextvars.bind_contextvars(identity_id=str(identity.id))
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


def get_current_profile(identity: CurrentIdentity, db: DBSession) -> Profile:
    try:
        return profiles_service.get_profile(db, identity)
    except NotFoundError as err:
        # Authenticated but not registered yet.
        raise HTTPException(
            status_code=403,
            detail={"code": err.code, "message": "register a profile first"},
        ) from None


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]
