from hostel_laundry.schemas.auth.user import (
    AccountCreate,
    LoginRequest,
    NotificationPreferences,
    NotificationPreferencesUpdate,
    ProfileUpdate,
    SignUpRequest,
    TokenResponse,
    UserProfile,
    UserSummary,
)

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
