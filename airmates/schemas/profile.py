# airmates/schemas/profile.py
import uuid
from datetime import datetime

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field


def _strip_optional(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    return v or None


class ProfileRead(SQLModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    email: EmailStr
    name: str
    full_name: str | None = None
    upi_id: str | None = None
    mobile_number: str | None = None
    created_at: datetime


class ProfileUpdate(SQLModel):
    """
    Partial profile update for authenticated users.

    Email is owned by Supabase Auth and cannot be changed here.
    Blank optional fields are cleared (stored as null).
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=50)
    full_name: str | None = Field(default=None, max_length=200)
    upi_id: str | None = Field(default=None, max_length=100)
    mobile_number: str | None = Field(default=None, max_length=30)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("full_name", "upi_id", "mobile_number")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return _strip_optional(v)
