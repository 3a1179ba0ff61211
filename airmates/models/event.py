# airmates/models/event.py
import uuid
from datetime import datetime, date, timezone

from sqlmodel import SQLModel, Field


class Event(SQLModel, table=True):
    """
    Household calendar event (bill due date, cleaning day, party...).
    """

    __tablename__ = "events"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(max_length=200)

    event_date: date = Field(
        index=True,
        description="Calendar day of the event",
    )

    notes: str | None = Field(
        default=None,
        description="Optional free-text details",
    )

    event_type: str = Field(
        default="General",
        max_length=50,
        description="Name of an event_types row",
    )

    created_by: uuid.UUID = Field(
        foreign_key="profiles.id",
        index=True,
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class EventType(SQLModel, table=True):
    """Selectable category for events."""

    __tablename__ = "event_types"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
    )
    name: str = Field(unique=True, max_length=50)
