# airmates/schemas/event.py
import uuid
from datetime import date, datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class EventBase(SQLModel):
    """
    Fields submitted by the event form.

    Validation rules:
      - name and event_type cannot be empty or whitespace
      - event_date accepts a date, a datetime or an ISO datetime string;
        it is always stored as the calendar day (YYYY-MM-DD)
      - blank notes are stored as null
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=200)
    event_date: date
    notes: str | None = None
    event_type: str = Field(default="General", max_length=50)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Event name is required")
        return v

    @field_validator("event_type")
    @classmethod
    def normalize_event_type(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Event type is required")
        return v

    @field_validator("event_date", mode="before")
    @classmethod
    def normalize_event_date(cls, v):
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and len(v) > 10:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return v

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v


class EventCreate(EventBase):
    """
    Payload for adding an event.
    """

    pass


class EventUpdate(EventBase):
    """
    Payload for editing an event; replaces every editable field.
    """

    pass


class EventRead(SQLModel):
    id: uuid.UUID
    name: str
    event_date: date
    notes: str | None = None
    event_type: str
    created_by: uuid.UUID
    created_at: datetime


class EventSaved(SQLModel):
    """Result of a create or update, with the message shown to the user."""

    event: EventRead
    message: str


class EventTypeRead(SQLModel):
    id: uuid.UUID
    name: str
