# airmates/schemas/roommate.py
import re
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

# Same rule the web client applies before submitting.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class RoommateCreate(SQLModel):
    """
    Payload for adding a roommate by the email of their AirMates account.
    """

    model_config = ConfigDict(extra="forbid")

    email: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Surrounding whitespace is stripped before matching and is not stored."""
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Please enter a valid email address")
        return v


class RoommateRead(SQLModel):
    """Read model for a single roommate row."""

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    upi_id: str
    email: str
    phone: str | None = None
    balance: float
    created_at: datetime


class RoommateSummary(SQLModel):
    """
    The caller's full roommate list, returned after every read or mutation.

    message carries the human-readable outcome of the mutation, if any.
    """

    items: list[RoommateRead]
    total_balance: float
    message: str | None = None


class PaymentRequestResult(SQLModel):
    message: str
