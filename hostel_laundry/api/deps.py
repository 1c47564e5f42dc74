"""
FastAPI Dependencies

Store access, service factories, authentication and the role gate used
by the v1 endpoints.

Example usage in a router:
    from fastapi import APIRouter, Depends
    from hostel_laundry.api import deps

    router = APIRouter()

    @router.get("/me")
    def read_me(current_user = Depends(deps.get_current_user)):
        return current_user
"""

from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from hostel_laundry.config.settings import Settings
from hostel_laundry.core import logging as log_context
from hostel_laundry.core.exceptions import AuthenticationError, AuthorizationError, InvalidTokenError
from hostel_laundry.core.logging import get_logger
from hostel_laundry.core.security import verify_token
from hostel_laundry.models import User
from hostel_laundry.models.base import UserRole
from hostel_laundry.repositories.data_store import DataStore
from hostel_laundry.repositories.store_factory import StoreProvider
from hostel_laundry.services.activity.activity_service import ActivityService
from hostel_laundry.services.auth.auth_service import AuthService
from hostel_laundry.services.laundry.batch_service import BatchService
from hostel_laundry.services.notification.email_service import EmailService
from hostel_laundry.services.notification.notification_dispatcher import NotificationDispatcher
from hostel_laundry.services.notification.notification_service import NotificationService
from hostel_laundry.services.schedule.date_schedule_service import DateScheduleService
from hostel_laundry.services.schedule.schedule_service import ScheduleService
from hostel_laundry.services.schedule.template_service import TemplateService

logger = get_logger(__name__)

# Security scheme; missing credentials are reported by get_current_user
security = HTTPBearer(auto_error=False)


# --- Settings & storage ---------------------------------------------------------

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store_provider(request: Request) -> StoreProvider:
    return request.app.state.store_provider


def get_store(provider: StoreProvider = Depends(get_store_provider)) -> Generator[DataStore, None, None]:
    """One store per request, closed when the response is done"""
    store = provider.open()
    try:
        yield store
    finally:
        store.close()


# --- Service factories ----------------------------------------------------------

def get_activity_service(
    store: DataStore = Depends(get_store),
    config: Settings = Depends(get_app_settings),
) -> ActivityService:
    return ActivityService(store, config)


def get_email_service(request: Request, config: Settings = Depends(get_app_settings)) -> EmailService:
    return EmailService(request.app.state.email_sender, config)


def get_dispatcher(
    store: DataStore = Depends(get_store),
    email_service: EmailService = Depends(get_email_service),
    activity: ActivityService = Depends(get_activity_service),
    config: Settings = Depends(get_app_settings),
) -> NotificationDispatcher:
    return NotificationDispatcher(store, email_service, activity, config)


def get_batch_service(
    store: DataStore = Depends(get_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    config: Settings = Depends(get_app_settings),
) -> BatchService:
    return BatchService(store, dispatcher, dispatcher.activity, config)


def get_notification_service(
    store: DataStore = Depends(get_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    config: Settings = Depends(get_app_settings),
) -> NotificationService:
    return NotificationService(store, dispatcher, dispatcher.activity, config)


def get_schedule_service(
    store: DataStore = Depends(get_store),
    activity: ActivityService = Depends(get_activity_service),
    config: Settings = Depends(get_app_settings),
) -> ScheduleService:
    return ScheduleService(store, activity, config)


def get_date_schedule_service(
    store: DataStore = Depends(get_store),
    activity: ActivityService = Depends(get_activity_service),
    config: Settings = Depends(get_app_settings),
) -> DateScheduleService:
    return DateScheduleService(store, activity, config)


def get_template_service(
    store: DataStore = Depends(get_store),
    activity: ActivityService = Depends(get_activity_service),
    config: Settings = Depends(get_app_settings),
) -> TemplateService:
    return TemplateService(store, activity, config)


def get_auth_service(
    store: DataStore = Depends(get_store),
    activity: ActivityService = Depends(get_activity_service),
    config: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(store, activity, config)


# --- Authentication & Authorization ---------------------------------------------

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: DataStore = Depends(get_store),
) -> User:
    """
    Resolve the bearer token to a user.

    The user is reloaded from the store on every request so the role that
    is checked is the stored one, never the claim inside the token.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")

    payload = verify_token(credentials.credentials)
    user = store.users.get_by_id(payload["sub"])
    if user is None:
        raise InvalidTokenError("Invalid token", reason="unknown_user")

    log_context.user_id.set(user.id)
    return user


def require_roles(*roles: UserRole):
    """Dependency factory admitting only users whose stored role is in ``roles``"""
    allowed = [UserRole(role) for role in roles]

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if UserRole(current_user.role) not in allowed:
            logger.warning(
                f"User {current_user.id} with role {UserRole(current_user.role).value} denied",
                extra={"required_roles": [role.value for role in allowed]},
            )
            raise AuthorizationError(
                "You do not have permission to perform this action",
                required_roles=[role.value for role in allowed],
            )
        return current_user

    return checker


get_staff_user = require_roles(UserRole.STAFF, UserRole.ADMIN)
get_admin_user = require_roles(UserRole.ADMIN)
get_student_user = require_roles(UserRole.STUDENT)


def is_staff(user: User) -> bool:
    return UserRole(user.role) in (UserRole.STAFF, UserRole.ADMIN)


__all__ = [
    "get_app_settings",
    "get_store_provider",
    "get_store",
    "get_activity_service",
    "get_email_service",
    "get_dispatcher",
    "get_batch_service",
    "get_notification_service",
    "get_schedule_service",
    "get_date_schedule_service",
    "get_template_service",
    "get_auth_service",
    "get_current_user",
    "require_roles",
    "get_staff_user",
    "get_admin_user",
    "get_student_user",
    "is_staff",
]
