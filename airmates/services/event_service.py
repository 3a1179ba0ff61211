# airmates/services/event_service.py
import logging
import uuid
from datetime import date

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from airmates.models.event import Event, EventType
from airmates.models.profile import Profile
from airmates.repositories.event_repo import EventRepository
from airmates.repositories.profile_repo import ProfileRepository
from airmates.repositories.roommate_repo import RoommateRepository
from airmates.schemas.event import EventCreate, EventRead, EventSaved, EventUpdate

logger = logging.getLogger(__name__)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return [first day of month, first day of next month)."""
    start = date(year, month, 1)
    if month == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, month + 1, 1)


class EventService:
    """
    Business logic for household events.

    Visibility: a user sees events they created plus events created by
    the registered accounts on their roommate list. Only the creator
    can edit an event.
    """

    def __init__(
        self,
        event_repo: EventRepository,
        roommate_repo: RoommateRepository,
        profile_repo: ProfileRepository,
    ):
        self.event_repo = event_repo
        self.roommate_repo = roommate_repo
        self.profile_repo = profile_repo

    def _visible_creator_ids(self, session: Session, current_user: Profile) -> list[uuid.UUID]:
        emails = [r.email for r in self.roommate_repo.list_for_user(session, current_user.id)]
        ids = self.profile_repo.list_ids_by_emails(session, emails)
        return [current_user.id, *[i for i in ids if i != current_user.id]]

    def list_event_types(self, session: Session) -> list[EventType]:
        return self.event_repo.list_types(session)

    def list_events(
        self,
        session: Session,
        current_user: Profile,
        year: int | None = None,
        month: int | None = None,
    ) -> list[Event]:
        """
        Events for one calendar month (defaults to the current month).
        """
        today = date.today()
        start, end = month_bounds(year or today.year, month or today.month)
        creator_ids = self._visible_creator_ids(session, current_user)
        return self.event_repo.list_in_range(session, creator_ids, start, end)

    def create_event(
        self,
        session: Session,
        current_user: Profile,
        payload: EventCreate,
    ) -> EventSaved:
        event = Event(
            name=payload.name,
            event_date=payload.event_date,
            notes=payload.notes,
            event_type=payload.event_type,
            created_by=current_user.id,
        )
        try:
            event = self.event_repo.create(session, event)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to save event: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to save event. Please try again.",
            )

        return EventSaved(
            event=EventRead.model_validate(event),
            message="Event added successfully.",
        )

    def update_event(
        self,
        session: Session,
        current_user: Profile,
        event_id: uuid.UUID,
        payload: EventUpdate,
    ) -> EventSaved:
        """
        Replace name, date, notes and type of an event.

        404 if the event does not exist or was created by someone else.
        """
        event = self.event_repo.get_by_id(session, event_id)
        if not event or event.created_by != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found",
            )

        event.name = payload.name
        event.event_date = payload.event_date
        event.notes = payload.notes
        event.event_type = payload.event_type

        try:
            event = self.event_repo.update(session, event)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to update event {event_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to save event. Please try again.",
            )

        return EventSaved(
            event=EventRead.model_validate(event),
            message="Event updated successfully.",
        )
