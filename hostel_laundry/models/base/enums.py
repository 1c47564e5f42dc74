"""
Enumerations shared by models, schemas and services.
"""

from enum import Enum
from typing import List, Type


class UserRole(str, Enum):
    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"


class BatchStatus(str, Enum):
    """Laundry batch lifecycle, in processing order"""
    SCHEDULED = "scheduled"
    DROPPED_OFF = "dropped_off"
    WASHING = "washing"
    READY_FOR_PICKUP = "ready_for_pickup"
    PICKED_UP = "picked_up"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class NotificationChannel(str, Enum):
    EMAIL = "email"
    SMS = "sms"


class ActivityType(str, Enum):
    LOGIN = "login"
    STATUS_CHANGE = "status_change"
    NOTIFICATION_SENT = "notification_sent"
    SCHEDULE_UPDATE = "schedule_update"
    PREFERENCES_UPDATE = "preferences_update"


def enum_values(enum_cls: Type[Enum]) -> List[str]:
    """Persist enum values rather than member names"""
    return [member.value for member in enum_cls]
