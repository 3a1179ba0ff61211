# airmates/repositories/profile_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from airmates.models.profile import Profile


class ProfileRepository:
    """
    Data access layer for Profile.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_id(self, session: Session, profile_id: uuid.UUID) -> Profile | None:
        """Return a Profile by primary key, or None if not found."""
        return session.get(Profile, profile_id)

    def get_by_email(self, session: Session, email: str) -> Profile | None:
        """Return a Profile by email (case-insensitive), or None if not found."""
        stmt = select(Profile).where(func.lower(Profile.email) == email.lower())
        return session.exec(stmt).first()

    def list_ids_by_emails(
        self, session: Session, emails: list[str]
    ) -> list[uuid.UUID]:
        """Return ids of profiles whose email (lower-cased) is in `emails`."""
        if not emails:
            return []
        lowered = [e.lower() for e in emails]
        stmt = select(Profile.id).where(func.lower(Profile.email).in_(lowered))
        return list(session.exec(stmt).all())

    def create(self, session: Session, profile: Profile) -> Profile:
        """Insert a new Profile and return the persisted row."""
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile

    def update(self, session: Session, profile: Profile) -> Profile:
        """Persist changes to an existing Profile."""
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile
