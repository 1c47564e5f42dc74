"""
Notification schemas.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from hostel_laundry.models.base import BatchStatus, NotificationChannel
from hostel_laundry.schemas.common.base import BaseSchema

__all__ = [
    "NotificationBatchSummary",
    "NotificationResponse",
    "BulkNotificationRequest",
    "BulkNotificationResponse",
    "MarkAllReadResponse",
]


class NotificationBatchSummary(BaseSchema):
    batch_number: str
    status: BatchStatus
    scheduled_date: date


class NotificationResponse(BaseSchema):
    id: str
    user_id: str
    batch_id: Optional[str] = None
    type: NotificationChannel
    message: str
    sent_at: datetime
    delivered: bool = Field(..., description="Transport accepted the message")
    delivered_at: Optional[datetime] = None
    is_read: bool = Field(..., description="Recipient has read the message")
    read_at: Optional[datetime] = None
    batch: Optional[NotificationBatchSummary] = None


class BulkNotificationRequest(BaseSchema):
    user_ids: List[str] = Field(..., min_length=1)
    message: str = Field(..., min_length=1, max_length=2000)
    channel: NotificationChannel = NotificationChannel.EMAIL


class BulkNotificationResponse(BaseSchema):
    requested: int
    sent: int
    failed: int
    failed_user_ids: List[str] = Field(default_factory=list)


class MarkAllReadResponse(BaseSchema):
    updated: int
