"""
Notification model.

``delivered`` records that the transport accepted the message;
``is_read`` records that the recipient acknowledged it.
"""

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, String, Text

from hostel_laundry.models.base import BaseModel, NotificationChannel, enum_values
from hostel_laundry.utils.datetime_utils import utcnow


class Notification(BaseModel):
    __tablename__ = "notifications"

    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    batch_id = Column(String(36), ForeignKey("laundry_batches.id"), nullable=True, index=True)
    type = Column(
        Enum(NotificationChannel, name="notification_channel", values_callable=enum_values, native_enum=False, length=16),
        nullable=False,
    )
    message = Column(Text, nullable=False)
    sent_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    delivered = Column(Boolean, nullable=False, default=False)
    delivered_at = Column(DateTime, nullable=True)

    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime, nullable=True)
