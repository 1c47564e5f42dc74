"""
Model registry. Importing this package registers every table on Base.metadata.
"""

from hostel_laundry.models.base import Base, BaseModel, TimestampModel
from hostel_laundry.models.user import User
from hostel_laundry.models.laundry import LaundryBatch
from hostel_laundry.models.schedule import (
    DateSchedule,
    LaundrySchedule,
    ScheduleTemplate,
    TemplateSchedule,
)
from hostel_laundry.models.notification import Notification
from hostel_laundry.models.activity import ActivityLog

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "User",
    "LaundryBatch",
    "LaundrySchedule",
    "DateSchedule",
    "ScheduleTemplate",
    "TemplateSchedule",
    "Notification",
    "ActivityLog",
]
