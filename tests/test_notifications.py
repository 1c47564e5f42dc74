from datetime import date, timedelta

import pytest

from conftest import make_user
from hostel_laundry.core.exceptions import NotificationError, ResourceNotFoundError, ValidationError
from hostel_laundry.models.base import ActivityType, BatchStatus, NotificationChannel
from hostel_laundry.utils.datetime_utils import utcnow


@pytest.fixture
def ready_batch(store, student):
    return store.batches.create(
        {
            "student_id": student.id,
            "batch_number": "LB900",
            "status": BatchStatus.READY_FOR_PICKUP,
            "scheduled_date": date(2024, 6, 10),
        }
    )


class TestDispatcher:
    def test_email_with_batch_uses_ready_template(self, services, email_sender, student, ready_batch):
        notification = services["dispatcher"].send_notification(
            student.id, ready_batch.id, NotificationChannel.EMAIL, "Ready!"
        )
        assert notification.delivered is True
        assert notification.delivered_at is not None
        assert email_sender.sent[0]["subject"] == "Your Laundry Batch LB900 is Ready for Pickup!"
        assert "LB900" in email_sender.sent[0]["html"]
        assert "Alice Student" in email_sender.sent[0]["text"]

    def test_email_without_batch_uses_generic_message(self, services, email_sender, student):
        services["dispatcher"].send_notification(student.id, None, NotificationChannel.EMAIL, "Machines down today")
        assert email_sender.sent[0]["subject"] == "Laundry Ready for Pickup"
        assert email_sender.sent[0]["text"] == "Machines down today"

    def test_sms_is_marked_delivered_without_email(self, services, email_sender, student):
        notification = services["dispatcher"].send_notification(student.id, None, NotificationChannel.SMS, "Hi")
        assert notification.type == NotificationChannel.SMS
        assert notification.delivered is True
        assert email_sender.sent == []

    def test_activity_records_email_outcome(self, services, store, student, ready_batch):
        services["dispatcher"].send_notification(student.id, ready_batch.id, "email", "Ready!")
        log = store.activity_logs.find_one({"activity_type": ActivityType.NOTIFICATION_SENT})
        assert log.description == "EMAIL notification sent"
        assert log.activity_metadata == {"batchId": ready_batch.id, "message": "Ready!", "emailSent": True}

    def test_unknown_user_raises_and_writes_nothing(self, services, store):
        with pytest.raises(ResourceNotFoundError):
            services["dispatcher"].send_notification("ghost", None, NotificationChannel.EMAIL, "Hi")
        assert store.notifications.count() == 0

    def test_transport_crash_becomes_notification_error(self, services, store, student, monkeypatch):
        def crash(*args, **kwargs):
            raise OSError("relay unreachable")

        monkeypatch.setattr(services["dispatcher"].email_service, "send_generic_email", crash)
        with pytest.raises(NotificationError) as exc_info:
            services["dispatcher"].send_notification(student.id, None, NotificationChannel.EMAIL, "Hi")
        assert exc_info.value.status_code == 502
        assert store.notifications.find_one({"user_id": student.id}).delivered is False


class TestInbox:
    @pytest.fixture
    def inbox(self, store, student, ready_batch):
        now = utcnow()
        for offset, read in ((3, True), (2, False), (1, False)):
            store.notifications.create(
                {
                    "user_id": student.id,
                    "batch_id": ready_batch.id,
                    "type": NotificationChannel.EMAIL,
                    "message": f"message {offset}",
                    "sent_at": now - timedelta(hours=offset),
                    "is_read": read,
                }
            )
        return student

    def test_newest_first_with_batch_summary(self, services, inbox):
        rows = services["notifications"].get_user_notifications(inbox.id)
        assert [row["message"] for row in rows] == ["message 1", "message 2", "message 3"]
        assert rows[0]["batch"] == {
            "batch_number": "LB900",
            "status": BatchStatus.READY_FOR_PICKUP,
            "scheduled_date": date(2024, 6, 10),
        }

    def test_limit(self, services, inbox):
        assert len(services["notifications"].get_user_notifications(inbox.id, limit=2)) == 2

    def test_unread_count_and_mark_as_read(self, services, store, inbox):
        assert services["notifications"].get_unread_count(inbox.id) == 2
        newest = services["notifications"].get_user_notifications(inbox.id)[0]

        read = services["notifications"].mark_as_read(newest["id"], inbox.id)
        assert read.is_read is True
        assert read.read_at is not None
        assert services["notifications"].get_unread_count(inbox.id) == 1

    def test_mark_as_read_keeps_delivery_flag(self, services, store, inbox):
        newest = services["notifications"].get_user_notifications(inbox.id)[0]
        services["notifications"].mark_as_read(newest["id"], inbox.id)
        assert store.notifications.get_by_id(newest["id"]).delivered is False

    def test_cannot_mark_someone_elses_notification(self, services, store, inbox):
        other = make_user(store, "mallory@student.college.edu")
        target = services["notifications"].get_user_notifications(inbox.id)[0]
        with pytest.raises(ResourceNotFoundError):
            services["notifications"].mark_as_read(target["id"], other.id)

    def test_mark_all_as_read(self, services, inbox):
        assert services["notifications"].mark_all_as_read(inbox.id) == 2
        assert services["notifications"].get_unread_count(inbox.id) == 0


class TestPreferences:
    def test_defaults(self, services, student):
        assert services["notifications"].get_preferences(student.id) == {
            "email_notifications": True,
            "sms_notifications": False,
        }

    def test_update_logs_activity(self, services, store, student):
        prefs = services["notifications"].update_preferences(student.id, {"email_notifications": False})
        assert prefs["email_notifications"] is False
        log = store.activity_logs.find_one({"activity_type": ActivityType.PREFERENCES_UPDATE})
        assert log.user_id == student.id
        assert log.activity_metadata == {"email_notifications": False}

    def test_empty_update_changes_nothing(self, services, store, student):
        services["notifications"].update_preferences(student.id, {"sms_notifications": None})
        assert store.activity_logs.count() == 0


class TestOutbound:
    def test_bulk_counts_failures_and_logs_against_sender(self, services, store, admin, student):
        other = make_user(store, "zoe@student.college.edu")
        result = services["notifications"].send_bulk_notification(
            admin.id, [student.id, "ghost", other.id, student.id], "Laundry room closed Friday"
        )

        assert result == {"requested": 3, "sent": 2, "failed": 1, "failed_user_ids": ["ghost"]}
        assert store.notifications.count() == 2
        summary = store.activity_logs.find_one({"user_id": admin.id})
        assert summary.description == "Sent bulk email notification to 2 users"

    def test_bulk_requires_recipients(self, services, admin):
        with pytest.raises(ValidationError):
            services["notifications"].send_bulk_notification(admin.id, [], "Hello")

    def test_pickup_reminder(self, services, email_sender, ready_batch):
        notification = services["notifications"].send_pickup_reminder(ready_batch.id)
        assert notification.message == (
            "Reminder: Your laundry batch LB900 is ready for pickup. Please collect it from the laundry room."
        )
        assert len(email_sender.sent) == 1

    def test_pickup_reminder_requires_ready_batch(self, services, store, ready_batch):
        store.batches.update(ready_batch.id, {"status": BatchStatus.PICKED_UP})
        with pytest.raises(ValidationError):
            services["notifications"].send_pickup_reminder(ready_batch.id)
