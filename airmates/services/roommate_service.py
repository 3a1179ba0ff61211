# airmates/services/roommate_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from airmates.models.profile import Profile
from airmates.models.roommate import Roommate
from airmates.repositories.profile_repo import ProfileRepository
from airmates.repositories.roommate_repo import RoommateRepository
from airmates.schemas.roommate import RoommateCreate, RoommateRead, RoommateSummary

logger = logging.getLogger(__name__)

DEFAULT_UPI_ID = "Not set"


def _display_name(profile: Profile, email: str, fallback: str) -> str:
    """name, then full_name, then the email local part, then `fallback`."""
    return profile.name or profile.full_name or email.split("@")[0] or fallback


class RoommateService:
    """
    Business logic for roommates.

    Responsibilities:
      - validate roommate additions (self, unknown account, duplicates)
      - write the initiator's row and a best-effort reciprocal row
      - scope every read/delete to rows owned by the caller
      - return the refreshed list after every mutation
    """

    def __init__(self, roommate_repo: RoommateRepository, profile_repo: ProfileRepository):
        self.roommate_repo = roommate_repo
        self.profile_repo = profile_repo

    # ---- internal helpers ----

    def _summary(
        self,
        session: Session,
        user_id: uuid.UUID,
        message: str | None = None,
    ) -> RoommateSummary:
        try:
            rows = self.roommate_repo.list_for_user(session, user_id)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Error fetching roommates for user {user_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to fetch roommates: {e}",
            )
        return RoommateSummary(
            items=[RoommateRead.model_validate(r) for r in rows],
            total_balance=sum(r.balance for r in rows),
            message=message,
        )

    def _create_reciprocal(
        self,
        session: Session,
        current_user: Profile,
        target: Profile,
    ) -> None:
        """
        Add the current user to the target's list.

        Failure is logged and swallowed: the initiator's row is already
        committed and stays in place.
        """
        user_email = current_user.email.lower()
        reciprocal = Roommate(
            user_id=target.id,
            name=_display_name(current_user, user_email, "Unknown User"),
            upi_id=current_user.upi_id or DEFAULT_UPI_ID,
            email=user_email,
            phone=current_user.mobile_number or None,
            balance=0.0,
        )
        try:
            self.roommate_repo.create(session, reciprocal)
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning(
                f"Reciprocal roommate entry for {target.id} failed, "
                f"main roommate was added: {e}"
            )
        else:
            logger.info(f"Reciprocal roommate created for {target.id}")

    # ---- public operations ----

    def list_roommates(self, session: Session, current_user: Profile) -> RoommateSummary:
        """Return every roommate row owned by the current user, newest first."""
        return self._summary(session, current_user.id)

    def add_roommate(
        self,
        session: Session,
        current_user: Profile,
        payload: RoommateCreate,
    ) -> RoommateSummary:
        """
        Add the account registered under `payload.email` as a roommate.

        Steps:
          1. Email format is already validated by RoommateCreate.
          2. Reject adding yourself (case-insensitive).
          3. Target must have a profile.
          4. Reject if the caller already has a row for that email.
          5. Insert the caller's row from the target's profile.
          6. Best-effort insert of the reciprocal row (see _create_reciprocal).

        No transaction spans steps 5 and 6.
        """
        email = payload.email
        logger.info(f"Adding roommate {email} for user {current_user.id}")

        if email.lower() == current_user.email.lower():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You cannot add yourself as a roommate",
            )

        try:
            target = self.profile_repo.get_by_email(session, email)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database error looking up profile {email}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to verify user. Please try again.",
            )
        if not target:
            logger.info(f"No profile found for {email}")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=(
                    f'No user found with email "{email}". Please make sure they '
                    "have signed up on AirMates, have logged in at least once, "
                    "and that the email address is correct."
                ),
            )

        try:
            existing = self.roommate_repo.get_by_email(session, current_user.id, email)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Error checking existing roommate {email}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Could not add roommate: {e}",
            )

        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="This roommate has already been added to your list.",
            )

        target_email = target.email.lower()
        added_name = target.name or target.email
        roommate = Roommate(
            user_id=current_user.id,
            name=_display_name(target, target_email, "Unknown"),
            upi_id=target.upi_id or DEFAULT_UPI_ID,
            email=target_email,
            phone=target.mobile_number or None,
            balance=0.0,
        )

        try:
            self.roommate_repo.create(session, roommate)
        except IntegrityError:
            # Lost a race with a concurrent add of the same email.
            session.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="This roommate has already been added to your list.",
            )
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to create roommate {email}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Could not add roommate: {e}",
            )

        logger.info(f"Roommate {roommate.id} created for user {current_user.id}")
        self._create_reciprocal(session, current_user, target)

        return self._summary(
            session,
            current_user.id,
            message=f"{added_name} has been added as your roommate!",
        )

    def delete_roommate(
        self,
        session: Session,
        current_user: Profile,
        roommate_id: uuid.UUID,
    ) -> RoommateSummary:
        """
        Remove one of the caller's roommate rows.

        The other party's reciprocal row is left untouched.
        """
        try:
            roommate = self.roommate_repo.get_for_user(session, current_user.id, roommate_id)
            if roommate:
                self.roommate_repo.delete(session, roommate)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Error deleting roommate {roommate_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to delete roommate: {e}",
            )

        if not roommate:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Roommate not found",
            )

        return self._summary(
            session,
            current_user.id,
            message="Roommate has been removed from your group",
        )

    def delete_all_roommates(
        self,
        session: Session,
        current_user: Profile,
    ) -> RoommateSummary:
        """Remove every row owned by the caller, and only those."""
        try:
            removed = self.roommate_repo.delete_all_for_user(session, current_user.id)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Error deleting all roommates for user {current_user.id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to remove all roommates: {e}",
            )
        logger.info(f"Removed {removed} roommates for user {current_user.id}")
        return self._summary(
            session,
            current_user.id,
            message="All roommates you added have been removed.",
        )
