from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt
from jwt import PyJWTError

from eventhub.auth.identity import Identity
from eventhub.core.config import settings


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(identity_id: uuid.UUID, email: str | None, ttl_seconds: int = 900) -> str:
    """Mint a token shaped like the auth provider's. Used by local tooling and tests."""
    now = _now()
    payload = {
        "sub": str(identity_id),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=ttl_seconds)).timestamp()),
        "aud": settings.jwt_audience,
    }
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> Identity:
    if not settings.jwt_secret:
        raise ValueError("jwt secret not configured")
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={"require": ["sub", "exp"]},
        )
    except PyJWTError as exc:
        raise ValueError("invalid access token") from exc

    try:
        identity_id = uuid.UUID(str(claims["sub"]))
    except ValueError as exc:
        raise ValueError("invalid subject in access token") from exc
    return Identity(id=identity_id, email=claims.get("email"))
