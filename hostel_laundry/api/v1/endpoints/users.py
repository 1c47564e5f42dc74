"""
Endpoints for the signed-in user's own profile and notification preferences,
plus admin account creation.
"""

from fastapi import APIRouter, Depends, status

from hostel_laundry.api import deps
from hostel_laundry.models import User
from hostel_laundry.schemas.auth import (
    AccountCreate,
    NotificationPreferences,
    NotificationPreferencesUpdate,
    ProfileUpdate,
    UserProfile,
)
from hostel_laundry.services.auth.auth_service import AuthService, profile_to_dict
from hostel_laundry.services.notification.notification_service import NotificationService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    current_user: User = Depends(deps.get_admin_user),
    service: AuthService = Depends(deps.get_auth_service),
):
    user = service.create_account(payload.model_dump(), actor_id=current_user.id)
    return profile_to_dict(user)


@router.patch("/me", response_model=UserProfile)
def update_me(
    payload: ProfileUpdate,
    current_user: User = Depends(deps.get_current_user),
    service: AuthService = Depends(deps.get_auth_service),
):
    user = service.update_profile(current_user.id, payload.model_dump(exclude_unset=True))
    return profile_to_dict(user)


@router.get("/me/preferences", response_model=NotificationPreferences)
def get_preferences(
    current_user: User = Depends(deps.get_current_user),
    service: NotificationService = Depends(deps.get_notification_service),
):
    return service.get_preferences(current_user.id)


@router.patch("/me/preferences", response_model=NotificationPreferences)
def update_preferences(
    payload: NotificationPreferencesUpdate,
    current_user: User = Depends(deps.get_current_user),
    service: NotificationService = Depends(deps.get_notification_service),
):
    return service.update_preferences(current_user.id, payload.model_dump(exclude_unset=True))
