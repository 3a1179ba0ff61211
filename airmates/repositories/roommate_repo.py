# airmates/repositories/roommate_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from airmates.models.roommate import Roommate


class RoommateRepository:

    # Rows owned by a user, newest first
    def list_for_user(self, session: Session, user_id: uuid.UUID) -> list[Roommate]:
        stmt = (
            select(Roommate)
            .where(Roommate.user_id == user_id)
            .order_by(Roommate.created_at.desc())
        )
        return list(session.exec(stmt).all())

    def get_for_user(
        self, session: Session, user_id: uuid.UUID, roommate_id: uuid.UUID
    ) -> Roommate | None:
        stmt = select(Roommate).where(
            Roommate.id == roommate_id, Roommate.user_id == user_id
        )
        return session.exec(stmt).first()

    def get_by_email(
        self, session: Session, user_id: uuid.UUID, email: str
    ) -> Roommate | None:
        """Case-insensitive lookup of a user's row for `email`."""
        stmt = select(Roommate).where(
            Roommate.user_id == user_id,
            func.lower(Roommate.email) == email.lower(),
        )
        return session.exec(stmt).first()

    # CRUD
    def create(self, session: Session, roommate: Roommate) -> Roommate:
        session.add(roommate)
        session.commit()
        session.refresh(roommate)
        return roommate

    def delete(self, session: Session, roommate: Roommate) -> None:
        session.delete(roommate)
        session.commit()

    def delete_all_for_user(self, session: Session, user_id: uuid.UUID) -> int:
        """Delete every row owned by `user_id`; returns the number removed."""
        rows = self.list_for_user(session, user_id)
        for row in rows:
            session.delete(row)
        session.commit()
        return len(rows)
