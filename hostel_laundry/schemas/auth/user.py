"""
Account, profile and preference schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from hostel_laundry.models.base import UserRole
from hostel_laundry.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "SignUpRequest",
    "AccountCreate",
    "LoginRequest",
    "UserSummary",
    "UserProfile",
    "TokenResponse",
    "ProfileUpdate",
    "NotificationPreferences",
    "NotificationPreferencesUpdate",
]


class SignUpRequest(BaseCreateSchema):
    """Public self-registration. Always creates a student and ignores any role sent."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=255)
    block: Optional[str] = Field(default=None, max_length=10)
    floor_number: Optional[int] = Field(default=None, ge=0)
    room_number: Optional[str] = Field(default=None, max_length=20)
    phone: Optional[str] = Field(default=None, max_length=20)

    @model_validator(mode="after")
    def check_student_location(self):
        if getattr(self, "role", UserRole.STUDENT) == UserRole.STUDENT:
            missing = [
                name for name in ("block", "floor_number", "room_number") if getattr(self, name) in (None, "")
            ]
            if missing:
                raise ValueError(f"Students must provide {', '.join(missing)}")
        return self


class AccountCreate(SignUpRequest):
    """Admin-created account of any role"""

    role: UserRole = UserRole.STUDENT


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserSummary(BaseSchema):
    """Public subset of a user attached to batches and activity entries"""

    id: str
    full_name: str
    email: str
    role: UserRole
    block: Optional[str] = None
    floor_number: Optional[int] = None
    room_number: Optional[str] = None


class UserProfile(UserSummary):
    phone: Optional[str] = None
    email_notifications: bool = True
    sms_notifications: bool = False
    created_at: Optional[datetime] = None


class TokenResponse(BaseSchema):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserProfile


class ProfileUpdate(BaseUpdateSchema):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    block: Optional[str] = Field(default=None, max_length=10)
    floor_number: Optional[int] = Field(default=None, ge=0)
    room_number: Optional[str] = Field(default=None, max_length=20)
    phone: Optional[str] = Field(default=None, max_length=20)


class NotificationPreferences(BaseSchema):
    email_notifications: bool
    sms_notifications: bool


class NotificationPreferencesUpdate(BaseUpdateSchema):
    email_notifications: Optional[bool] = None
    sms_notifications: Optional[bool] = None
