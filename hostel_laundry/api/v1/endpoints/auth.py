"""
Authentication endpoints: sign-up, sign-in and the current session.
"""

from fastapi import APIRouter, Depends, status

from hostel_laundry.api import deps
from hostel_laundry.models import User
from hostel_laundry.schemas.auth import LoginRequest, SignUpRequest, TokenResponse, UserProfile
from hostel_laundry.services.auth.auth_service import AuthService, profile_to_dict

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
def sign_up(payload: SignUpRequest, service: AuthService = Depends(deps.get_auth_service)):
    user = service.sign_up(payload.model_dump())
    return profile_to_dict(user)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, service: AuthService = Depends(deps.get_auth_service)):
    return service.sign_in(payload.email, payload.password)


@router.get("/me", response_model=UserProfile)
def read_me(current_user: User = Depends(deps.get_current_user)):
    return profile_to_dict(current_user)
