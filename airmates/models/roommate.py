# airmates/models/roommate.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Roommate(SQLModel, table=True):
    """
    One user's view of a shared-expense contact.

    A relationship between two users is stored as two independent rows,
    one per owner. One owner cannot have 2 rows for the same email.
    """

    __tablename__ = "roommates"
    __table_args__ = (
        UniqueConstraint("user_id", "email", name="uq_roommates_user_email"),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    # Owner of this row
    user_id: uuid.UUID = Field(
        foreign_key="profiles.id",
        index=True,
    )

    name: str = Field(max_length=200)
    upi_id: str = Field(default="Not set", max_length=100)

    email: str = Field(
        index=True,
        description="Stored lower-case",
    )
    phone: str | None = None

    balance: float = Field(
        default=0.0,
        description="Signed amount owed between owner and roommate",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
