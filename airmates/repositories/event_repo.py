# airmates/repositories/event_repo.py
import uuid
from datetime import date

from sqlmodel import Session, select

from airmates.models.event import Event, EventType


class EventRepository:
    """
    Data access layer for events and event_types.
    """

    # ---- Events ----

    def get_by_id(self, session: Session, event_id: uuid.UUID) -> Event | None:
        return session.get(Event, event_id)

    def list_in_range(
        self,
        session: Session,
        creator_ids: list[uuid.UUID],
        start: date,
        end: date,
    ) -> list[Event]:
        """
        Events created by any of `creator_ids` with start <= event_date < end,
        ordered by date.
        """
        stmt = (
            select(Event)
            .where(
                Event.created_by.in_(creator_ids),
                Event.event_date >= start,
                Event.event_date < end,
            )
            .order_by(Event.event_date, Event.created_at)
        )
        return list(session.exec(stmt).all())

    def create(self, session: Session, event: Event) -> Event:
        session.add(event)
        session.commit()
        session.refresh(event)
        return event

    def update(self, session: Session, event: Event) -> Event:
        session.add(event)
        session.commit()
        session.refresh(event)
        return event

    # ---- Event types ----

    def list_types(self, session: Session) -> list[EventType]:
        stmt = select(EventType).order_by(EventType.name)
        return list(session.exec(stmt).all())
