"""
Notification dispatcher.

Every dispatch leaves a notification row behind, whether or not the
transport delivers it. ``delivered`` is set only when the transport accepts
the message.
"""

from typing import Optional

from hostel_laundry.config.settings import Settings
from hostel_laundry.core.exceptions import BaseAppException, NotificationError, ResourceNotFoundError
from hostel_laundry.models import Notification
from hostel_laundry.models.base import ActivityType, NotificationChannel
from hostel_laundry.repositories.data_store import DataStore
from hostel_laundry.services.activity.activity_service import ActivityService
from hostel_laundry.services.base.base_service import BaseService
from hostel_laundry.services.notification.email_service import EmailService
from hostel_laundry.utils.datetime_utils import utcnow


class NotificationDispatcher(BaseService):
    def __init__(
        self,
        store: DataStore,
        email_service: EmailService,
        activity_service: Optional[ActivityService] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(store, config)
        self.email_service = email_service
        self.activity = activity_service or ActivityService(store, config)

    def send_notification(
        self,
        user_id: str,
        batch_id: Optional[str],
        channel: NotificationChannel,
        message: str,
    ) -> Notification:
        """
        Record and deliver one notification.

        Steps: read the recipient's preferences, persist the row undelivered,
        attempt delivery on the requested channel, then record the outcome
        in the activity log. Any failure is logged and re-raised; errors that
        are not application errors are raised as NotificationError.
        """
        channel = NotificationChannel(channel)
        try:
            user = self.store.users.get_by_id(user_id)
            if user is None:
                raise ResourceNotFoundError("User", user_id)
            batch = self.store.batches.get_by_id(batch_id) if batch_id else None

            notification = self.store.notifications.create(
                {
                    "user_id": user_id,
                    "batch_id": batch_id,
                    "type": channel,
                    "message": message,
                    "delivered": False,
                }
            )

            email_sent = False
            if channel == NotificationChannel.EMAIL:
                if not user.email_notifications:
                    self._logger.info(f"Email notifications disabled for user {user_id}; not sending")
                elif not user.email:
                    self._logger.info(f"User {user_id} has no email address; not sending")
                else:
                    if batch is not None:
                        email_sent = self.email_service.send_laundry_ready_email(
                            user.email,
                            user.full_name or "Student",
                            batch.batch_number,
                            user.block,
                            user.room_number,
                        )
                    else:
                        email_sent = self.email_service.send_generic_email(user.email, message)

                    if email_sent:
                        notification = self._mark_delivered(notification)
                    else:
                        self._logger.warning(f"Email to user {user_id} was not delivered")

            elif channel == NotificationChannel.SMS:
                # No SMS transport yet; the message counts as delivered once recorded
                notification = self._mark_delivered(notification)

            self.activity.log_activity(
                user_id,
                ActivityType.NOTIFICATION_SENT,
                f"{channel.value.upper()} notification sent",
                {"batchId": batch_id, "message": message, "emailSent": email_sent},
            )
            return notification

        except BaseAppException as e:
            self._logger.error(f"Error sending {channel.value} notification to user {user_id}: {e.message}")
            raise
        except Exception as e:
            self._logger.error(f"Error sending {channel.value} notification to user {user_id}: {e}", exc_info=True)
            raise NotificationError(f"Could not send {channel.value} notification", channel=channel.value) from e

    def _mark_delivered(self, notification: Notification) -> Notification:
        updated = self.store.notifications.update(
            notification.id, {"delivered": True, "delivered_at": utcnow()}
        )
        return updated or notification
