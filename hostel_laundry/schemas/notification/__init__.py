from hostel_laundry.schemas.notification.notification import (
    BulkNotificationRequest,
    BulkNotificationResponse,
    MarkAllReadResponse,
    NotificationBatchSummary,
    NotificationResponse,
)

__all__ = [
    "NotificationBatchSummary",
    "NotificationResponse",
    "BulkNotificationRequest",
    "BulkNotificationResponse",
    "MarkAllReadResponse",
]
