from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from eventhub.models.profile import Role


class ProfileCreate(BaseModel):
    full_name: str = Field(max_length=200)
    role: Role
    phone: str | None = Field(default=None, max_length=50)
    company: str | None = Field(default=None, max_length=200)
    skills: list[str] = Field(default_factory=list)


class ProfileUpdate(BaseModel):
    # Unknown keys (including "role") are rejected: the role never changes.
    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    company: str | None = Field(default=None, max_length=200)
    skills: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _require_at_least_one_field(cls, data):
        if isinstance(data, dict) and not data:
            raise ValueError("at least one editable field must be provided")
        return data


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: str
    role: Role
    phone: str | None = None
    company: str | None = None
    skills: list[str]
    created_at: datetime
    updated_at: datetime
