# airmates/routers/profiles.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from airmates.core.auth import require_auth
from airmates.database import get_session
from airmates.models.profile import Profile
from airmates.repositories.profile_repo import ProfileRepository
from airmates.schemas.profile import ProfileRead, ProfileUpdate
from airmates.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["Profiles"])

repo = ProfileRepository()
service = ProfileService(repo)


@router.get("/me", response_model=ProfileRead)
def read_me(current_user: Profile = Depends(require_auth)):
    """
    Return the authenticated user's profile.

    Auth:
      - Requires valid Supabase JWT.
    """
    return service.get_me(current_user)


@router.patch("/me", response_model=ProfileRead)
def update_me(
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(require_auth),
):
    """
    Update the authenticated user's profile (partial update).

    These details (name, UPI id, phone) are copied into the roommate
    rows other users create for you.
    """
    return service.update_me(session, current_user, payload)
