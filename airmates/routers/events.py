# airmates/routers/events.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from airmates.core.auth import require_auth
from airmates.database import get_session
from airmates.models.profile import Profile
from airmates.repositories.event_repo import EventRepository
from airmates.repositories.profile_repo import ProfileRepository
from airmates.repositories.roommate_repo import RoommateRepository
from airmates.schemas.event import (
    EventCreate,
    EventRead,
    EventSaved,
    EventTypeRead,
    EventUpdate,
)
from airmates.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["Events"])

service = EventService(EventRepository(), RoommateRepository(), ProfileRepository())


@router.get("/types", response_model=list[EventTypeRead])
def list_event_types(
    session: Session = Depends(get_session),
    current_user: Profile = Depends(require_auth),
):
    """
    List selectable event types, sorted by name.
    """
    return service.list_event_types(session)


@router.get("", response_model=list[EventRead])
def list_events(
    year: int | None = Query(default=None, ge=1970, le=9999),
    month: int | None = Query(default=None, ge=1, le=12),
    session: Session = Depends(get_session),
    current_user: Profile = Depends(require_auth),
):
    """
    List events for one month (current month by default).

    Includes events created by the current user's roommates.
    """
    return service.list_events(session, current_user, year, month)


@router.post("", response_model=EventSaved, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(require_auth),
):
    return service.create_event(session, current_user, payload)


@router.put("/{event_id}", response_model=EventSaved)
def update_event(
    event_id: uuid.UUID,
    payload: EventUpdate,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(require_auth),
):
    """
    Edit an event created by the current user.
    """
    return service.update_event(session, current_user, event_id, payload)
