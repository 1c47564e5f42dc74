"""
Append-only activity log model.
"""

from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, String, Text

from hostel_laundry.models.base import ActivityType, BaseModel, enum_values
from hostel_laundry.utils.datetime_utils import utcnow


class ActivityLog(BaseModel):
    __tablename__ = "activity_logs"

    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    activity_type = Column(
        Enum(ActivityType, name="activity_type", values_callable=enum_values, native_enum=False, length=32),
        nullable=False,
    )
    description = Column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    activity_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
