# airmates/services/profile_service.py
from sqlmodel import Session

from airmates.models.profile import Profile
from airmates.repositories.profile_repo import ProfileRepository
from airmates.schemas.profile import ProfileUpdate


class ProfileService:
    """
    Business logic for the caller's own profile.

    The profile row is auto-provisioned in `get_current_user`; these
    operations only read it or fill the editable fields that roommate
    rows are copied from.
    """

    def __init__(self, repo: ProfileRepository):
        self.repo = repo

    def get_me(self, current_user: Profile) -> Profile:
        """Return the current authenticated user's profile."""
        return current_user

    def update_me(
        self,
        session: Session,
        current_user: Profile,
        payload: ProfileUpdate,
    ) -> Profile:
        """
        Partial update: only fields present in the request are written.
        Email cannot be changed (ProfileUpdate forbids it).
        """
        for field, value in payload.model_dump(exclude_unset=True).items():
            # name is required on the row; an explicit null leaves it as is
            if field == "name" and value is None:
                continue
            setattr(current_user, field, value)

        return self.repo.update(session, current_user)
