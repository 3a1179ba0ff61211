# airmates/models/profile.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field

NAME_MAX_LENGTH = 50


class Profile(SQLModel, table=True):
    """
    Canonical identity record for a registered AirMates account.

    Identity:
      - id: MUST match Supabase auth.users.id (UUID from JWT "sub")

    This table is *not* responsible for password hashes. Supabase Auth
    stores the password in its own schema. We only mirror identity and
    the details copied into roommate rows (name, UPI id, phone).
    """

    __tablename__ = "profiles"

    id: uuid.UUID = Field(
        primary_key=True,
        index=True,
        description="Matches Supabase auth.users.id",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Email from Supabase auth.users",
    )

    name: str = Field(
        max_length=NAME_MAX_LENGTH,
        description="Display name; first part of email by default",
    )
    full_name: str | None = Field(default=None, max_length=200)

    upi_id: str | None = Field(
        default=None,
        max_length=100,
        description="Payment identifier shown to roommates",
    )
    mobile_number: str | None = Field(default=None, max_length=30)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
