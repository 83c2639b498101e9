from __future__ import annotations

import uuid
from dataclasses import dataclass

# Dev tokens map an email to a stable identity id.
DEV_IDENTITY_NAMESPACE = uuid.UUID("6f1d3c52-8a0e-4f5b-9a57-0c3d2b7e9e41")


@dataclass(frozen=True)
class Identity:
    """An authenticated caller as reported by the auth provider."""

    id: uuid.UUID
    email: str | None = None


def dev_identity(email: str) -> Identity:
    normalized = email.strip().lower()
    return Identity(id=uuid.uuid5(DEV_IDENTITY_NAMESPACE, normalized), email=normalized)
