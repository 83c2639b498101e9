from __future__ import annotations

import uuid
from enum import Enum

import sqlalchemy as sa
from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from eventhub.models.base import Base, TimestampMixin


class Role(str, Enum):
    ORGANIZER = "organizer"
    ATTENDEE = "attendee"
    VOLUNTEER = "volunteer"


class Profile(Base, TimestampMixin):
    __tablename__ = "profiles"

    # Same id as the identity issued by the auth provider.
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[Role] = mapped_column(
        sa.Enum(Role, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    skills: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
