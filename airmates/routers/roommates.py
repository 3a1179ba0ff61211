# airmates/routers/roommates.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from airmates.core.auth import require_auth
from airmates.database import get_session
from airmates.models.profile import Profile
from airmates.repositories.profile_repo import ProfileRepository
from airmates.repositories.roommate_repo import RoommateRepository
from airmates.schemas.roommate import PaymentRequestResult, RoommateCreate, RoommateSummary
from airmates.services.notification_service import NotificationService
from airmates.services.roommate_service import RoommateService

router = APIRouter(prefix="/roommates", tags=["Roommates"])

roommate_repo = RoommateRepository()
profile_repo = ProfileRepository()
service = RoommateService(roommate_repo, profile_repo)
notifier = NotificationService(roommate_repo)


@router.get("", response_model=RoommateSummary)
def list_roommates(
    session: Session = Depends(get_session),
    current_user: Profile = Depends(require_auth),
):
    """
    Get the current user's roommates, newest first, with the balance total.
    """
    return service.list_roommates(session, current_user)


@router.post("", response_model=RoommateSummary, status_code=status.HTTP_201_CREATED)
def add_roommate(
    payload: RoommateCreate,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(require_auth),
):
    """
    Add a registered user as a roommate by email.

    Also adds the current user to the other user's list (best effort).
    Returns the updated roommate list.
    """
    return service.add_roommate(session, current_user, payload)


@router.delete("", response_model=RoommateSummary)
def delete_all_my_roommates(
    session: Session = Depends(get_session),
    current_user: Profile = Depends(require_auth),
):
    """
    Remove every roommate the current user has added.

    Returns an empty roommate list.
    """
    return service.delete_all_roommates(session, current_user)


@router.delete("/{roommate_id}", response_model=RoommateSummary)
def delete_roommate(
    roommate_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(require_auth),
):
    """
    Remove one roommate from the current user's list.

    Returns the updated roommate list.
    """
    return service.delete_roommate(session, current_user, roommate_id)


@router.post("/{roommate_id}/payment-request", response_model=PaymentRequestResult)
def send_payment_request(
    roommate_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(require_auth),
):
    """
    Email the roommate a request to settle their balance.
    """
    return notifier.send_payment_request(session, current_user, roommate_id)
