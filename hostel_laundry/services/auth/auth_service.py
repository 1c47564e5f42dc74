"""
Authentication Service

Account registration, credential checks and profile maintenance. Passwords
are stored as bcrypt hashes; sign-in issues a signed JWT access token.
"""

from typing import Any, Dict, Optional

from hostel_laundry.core.exceptions import AuthenticationError, EntityAlreadyExistsError, ValidationError
from hostel_laundry.core.security import create_access_token, hash_password, verify_password
from hostel_laundry.models import User
from hostel_laundry.models.base import ActivityType, UserRole
from hostel_laundry.services.activity.activity_service import ActivityService
from hostel_laundry.services.base.base_service import BaseService, user_summary

INVALID_CREDENTIALS = "Invalid credentials"

STUDENT_LOCATION_FIELDS = ("block", "floor_number", "room_number")
PROFILE_FIELDS = ("full_name", "block", "floor_number", "room_number", "phone")


def profile_to_dict(user: User) -> Dict[str, Any]:
    profile = user_summary(user)
    profile.update(
        phone=user.phone,
        email_notifications=user.email_notifications,
        sms_notifications=user.sms_notifications,
        created_at=user.created_at,
    )
    return profile


class AuthService(BaseService):
    def __init__(self, store, activity_service: Optional[ActivityService] = None, config=None):
        super().__init__(store, config)
        self.activity = activity_service or ActivityService(store, config)

    @staticmethod
    def _normalize_email(email: str) -> str:
        return (email or "").strip().lower()

    def sign_up(self, data: Dict[str, Any]) -> User:
        """
        Self-register a student account.

        The role is fixed to student whatever the payload says; staff and
        admin accounts come from :meth:`create_account`.
        """
        return self._register(data, UserRole.STUDENT)

    def create_account(self, data: Dict[str, Any], actor_id: Optional[str] = None) -> User:
        """Admin-only registration of an account with any role"""
        user = self._register(data, UserRole(data.get("role") or UserRole.STUDENT))
        self._logger.info(f"Account {user.id} created by {actor_id}")
        return user

    def _register(self, data: Dict[str, Any], role: UserRole) -> User:
        """
        Students must give their block, floor and room so that schedules and
        batches can be matched to them.

        Raises:
            ValidationError: missing fields
            EntityAlreadyExistsError: email already registered
        """
        values = {key: value for key, value in data.items() if value is not None}
        values["email"] = self._normalize_email(values.get("email", ""))

        required = ["email", "password", "full_name"]
        if role == UserRole.STUDENT:
            required.extend(STUDENT_LOCATION_FIELDS)
        self._require(values, required)

        if self.store.users.find_one({"email": values["email"]}) is not None:
            raise EntityAlreadyExistsError("An account with this email already exists", table="users", fields=["email"])

        user = self.store.users.create(
            {
                "email": values["email"],
                "password_hash": hash_password(values["password"]),
                "full_name": values["full_name"].strip(),
                "role": role,
                "block": values.get("block"),
                "floor_number": values.get("floor_number"),
                "room_number": values.get("room_number"),
                "phone": values.get("phone"),
                "email_notifications": True,
                "sms_notifications": False,
            }
        )
        self._logger.info(f"Registered {role.value} account {user.id}")
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials; every failure looks the same to the caller"""
        user = self.store.users.find_one({"email": self._normalize_email(email)})
        if user is None or not verify_password(password or "", user.password_hash):
            self._logger.warning("Failed sign-in attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)
        return user

    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        user = self.authenticate(email, password)
        role = UserRole(user.role)
        token = create_access_token({"sub": user.id, "role": role.value})

        self.activity.log_activity(user.id, ActivityType.LOGIN, "User logged in", {"role": role.value})
        return {
            "access_token": token,
            "token_type": "bearer",
            "expires_in": self.settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "user": profile_to_dict(user),
        }

    def get_profile(self, user_id: str) -> User:
        return self.store.users.get_by_id_or_raise(user_id, "User")

    def update_profile(self, user_id: str, data: Dict[str, Any]) -> User:
        changes = {key: value for key, value in data.items() if key in PROFILE_FIELDS and value is not None}
        if "full_name" in changes:
            changes["full_name"] = changes["full_name"].strip()
            if not changes["full_name"]:
                raise ValidationError("Full name cannot be empty", field_errors={"full_name": ["Required"]})
        if not changes:
            return self.get_profile(user_id)

        user = self.store.users.update(user_id, changes)
        if user is None:
            return self.get_profile(user_id)
        return user
