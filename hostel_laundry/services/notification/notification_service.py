"""
User-facing notification operations: inbox, read state, preferences,
bulk announcements and pickup reminders.
"""

from typing import Any, Dict, List, Optional, Sequence

from hostel_laundry.config.settings import Settings
from hostel_laundry.core.exceptions import BaseAppException, ResourceNotFoundError, ValidationError
from hostel_laundry.models import Notification
from hostel_laundry.models.base import ActivityType, BatchStatus, NotificationChannel
from hostel_laundry.repositories.base import Sort
from hostel_laundry.repositories.data_store import DataStore
from hostel_laundry.services.activity.activity_service import ActivityService
from hostel_laundry.services.base.base_service import BaseService
from hostel_laundry.services.notification.notification_dispatcher import NotificationDispatcher
from hostel_laundry.utils.datetime_utils import utcnow

PICKUP_REMINDER_MESSAGE = (
    "Reminder: Your laundry batch {batch_number} is ready for pickup. "
    "Please collect it from the laundry room."
)

PREFERENCE_FIELDS = ("email_notifications", "sms_notifications")


class NotificationService(BaseService):
    def __init__(
        self,
        store: DataStore,
        dispatcher: NotificationDispatcher,
        activity_service: Optional[ActivityService] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(store, config)
        self.dispatcher = dispatcher
        self.activity = activity_service or dispatcher.activity

    # ==================== Inbox ====================

    def get_user_notifications(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Most recent notifications first, each with a summary of its batch."""
        notifications = self.store.notifications.find(
            {"user_id": user_id},
            order_by=Sort.desc("sent_at"),
            limit=limit or self.settings.NOTIFICATION_LIST_LIMIT,
        )
        batches = self.store.batches.find_by_ids(n.batch_id for n in notifications)

        results = []
        for notification in notifications:
            batch = batches.get(notification.batch_id)
            results.append(
                {
                    "id": notification.id,
                    "user_id": notification.user_id,
                    "batch_id": notification.batch_id,
                    "type": notification.type,
                    "message": notification.message,
                    "sent_at": notification.sent_at,
                    "delivered": notification.delivered,
                    "delivered_at": notification.delivered_at,
                    "is_read": notification.is_read,
                    "read_at": notification.read_at,
                    "batch": (
                        {
                            "batch_number": batch.batch_number,
                            "status": batch.status,
                            "scheduled_date": batch.scheduled_date,
                        }
                        if batch is not None
                        else None
                    ),
                }
            )
        return results

    def get_unread_count(self, user_id: str) -> int:
        return self.store.notifications.count({"user_id": user_id, "is_read": False})

    def mark_as_read(self, notification_id: str, user_id: str) -> Notification:
        notification = self.store.notifications.get_by_id(notification_id)
        # Another user's notification is reported as missing
        if notification is None or notification.user_id != user_id:
            raise ResourceNotFoundError("Notification", notification_id)
        if notification.is_read:
            return notification
        return self.store.notifications.update(notification_id, {"is_read": True, "read_at": utcnow()})

    def mark_all_as_read(self, user_id: str) -> int:
        return self.store.notifications.update_where(
            {"user_id": user_id, "is_read": False},
            {"is_read": True, "read_at": utcnow()},
        )

    # ==================== Preferences ====================

    def get_preferences(self, user_id: str) -> Dict[str, bool]:
        user = self.store.users.get_by_id_or_raise(user_id, "User")
        return {
            "email_notifications": user.email_notifications is not False,
            "sms_notifications": bool(user.sms_notifications),
        }

    def update_preferences(self, user_id: str, preferences: Dict[str, Optional[bool]]) -> Dict[str, bool]:
        changes = {key: value for key, value in preferences.items() if key in PREFERENCE_FIELDS and value is not None}
        if not changes:
            return self.get_preferences(user_id)

        if self.store.users.update(user_id, changes) is None:
            raise ResourceNotFoundError("User", user_id)

        self.activity.log_activity(
            user_id,
            ActivityType.PREFERENCES_UPDATE,
            "Updated notification preferences",
            changes,
        )
        return self.get_preferences(user_id)

    # ==================== Outbound ====================

    def send_bulk_notification(
        self,
        sender_id: str,
        user_ids: Sequence[str],
        message: str,
        channel: NotificationChannel = NotificationChannel.EMAIL,
    ) -> Dict[str, Any]:
        """Dispatch one message to many users; per-user failures are counted, not raised."""
        channel = NotificationChannel(channel)
        recipients = list(dict.fromkeys(user_ids))
        if not recipients:
            raise ValidationError("At least one recipient is required", field_errors={"user_ids": ["Empty"]})

        sent, failed = [], []
        for user_id in recipients:
            try:
                self.dispatcher.send_notification(user_id, None, channel, message)
                sent.append(user_id)
            except BaseAppException as e:
                self._logger.warning(f"Bulk notification to {user_id} failed: {e.message}")
                failed.append(user_id)

        self.activity.log_activity(
            sender_id,
            ActivityType.NOTIFICATION_SENT,
            f"Sent bulk {channel.value} notification to {len(sent)} users",
            {"message": message, "userIds": sent, "failedUserIds": failed},
        )
        return {"requested": len(recipients), "sent": len(sent), "failed": len(failed), "failed_user_ids": failed}

    def send_pickup_reminder(self, batch_id: str) -> Notification:
        batch = self.store.batches.get_by_id_or_raise(batch_id, "Laundry batch")
        if batch.status != BatchStatus.READY_FOR_PICKUP:
            raise ValidationError(
                "Pickup reminders can only be sent for batches that are ready for pickup",
                field_errors={"status": [f"Batch is {BatchStatus(batch.status).value}"]},
            )
        message = PICKUP_REMINDER_MESSAGE.format(batch_number=batch.batch_number)
        return self.dispatcher.send_notification(batch.student_id, batch.id, NotificationChannel.EMAIL, message)
