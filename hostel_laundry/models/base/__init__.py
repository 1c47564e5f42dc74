from hostel_laundry.models.base.base_model import Base, BaseModel, TimestampModel, generate_uuid
from hostel_laundry.models.base.enums import (
    ActivityType,
    BatchStatus,
    NotificationChannel,
    UserRole,
    Weekday,
    enum_values,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "generate_uuid",
    "ActivityType",
    "BatchStatus",
    "NotificationChannel",
    "UserRole",
    "Weekday",
    "enum_values",
]
