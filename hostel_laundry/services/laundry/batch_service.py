"""
Laundry batch service, including the status lifecycle controller.
"""

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from hostel_laundry.config.settings import Settings
from hostel_laundry.core.exceptions import EntityAlreadyExistsError, ResourceNotFoundError, ValidationError
from hostel_laundry.models import LaundryBatch, User
from hostel_laundry.models.base import ActivityType, BatchStatus, NotificationChannel, UserRole
from hostel_laundry.repositories.base import Filter, Sort
from hostel_laundry.repositories.data_store import DataStore
from hostel_laundry.services.activity.activity_service import ActivityService
from hostel_laundry.services.base.base_service import BaseService, user_summary
from hostel_laundry.services.laundry.batch_number import BatchNumberGenerator, default_generator
from hostel_laundry.services.laundry.status_transitions import STATUS_TIMESTAMP_FIELDS, validate_transition
from hostel_laundry.services.notification.notification_dispatcher import NotificationDispatcher
from hostel_laundry.utils.datetime_utils import DateTimeHelper, utcnow

READY_FOR_PICKUP_MESSAGE = "Your laundry batch {batch_number} is ready for pickup!"

BATCH_NUMBER_ATTEMPTS = 3


def batch_to_dict(batch: LaundryBatch, student: Optional[User] = None) -> Dict[str, Any]:
    return {
        "id": batch.id,
        "student_id": batch.student_id,
        "batch_number": batch.batch_number,
        "status": batch.status,
        "scheduled_date": batch.scheduled_date,
        "dropped_off_at": batch.dropped_off_at,
        "ready_at": batch.ready_at,
        "picked_up_at": batch.picked_up_at,
        "staff_notes": batch.staff_notes,
        "created_at": batch.created_at,
        "updated_at": batch.updated_at,
        "student": user_summary(student),
    }


class BatchService(BaseService):
    def __init__(
        self,
        store: DataStore,
        dispatcher: NotificationDispatcher,
        activity_service: Optional[ActivityService] = None,
        config: Optional[Settings] = None,
        number_generator: Optional[BatchNumberGenerator] = None,
    ):
        super().__init__(store, config)
        self.dispatcher = dispatcher
        self.activity = activity_service or dispatcher.activity
        self.numbers = number_generator or default_generator

    # ==================== Creation & lookup ====================

    def create_batch(self, student_id: str, scheduled_date: date) -> LaundryBatch:
        """New batch in the scheduled state with a generated batch number."""
        student = self.store.users.get_by_id(student_id)
        if student is None or student.role != UserRole.STUDENT:
            raise ValidationError(
                "Batches can only be created for students",
                field_errors={"student_id": ["Unknown student"]},
            )
        if scheduled_date is None:
            raise ValidationError("Scheduled date is required", field_errors={"scheduled_date": ["Required"]})

        for attempt in range(1, BATCH_NUMBER_ATTEMPTS + 1):
            try:
                batch = self.store.batches.create(
                    {
                        "student_id": student_id,
                        "batch_number": self.numbers.next(),
                        "status": BatchStatus.SCHEDULED,
                        "scheduled_date": scheduled_date,
                    }
                )
                break
            except EntityAlreadyExistsError:
                # Another process took the same millisecond
                if attempt == BATCH_NUMBER_ATTEMPTS:
                    raise

        self._logger.info(f"Created batch {batch.batch_number} for student {student_id}")
        return batch

    def get_batch(self, batch_id: str) -> LaundryBatch:
        return self.store.batches.get_by_id_or_raise(batch_id, "Laundry batch")

    def get_batch_with_student(self, batch_id: str) -> Dict[str, Any]:
        batch = self.get_batch(batch_id)
        return batch_to_dict(batch, self.store.users.get_by_id(batch.student_id))

    def get_student_batches(self, student_id: str) -> List[LaundryBatch]:
        return self.store.batches.find({"student_id": student_id}, order_by=Sort.desc("created_at"))

    def get_active_batch(self, student_id: str) -> Optional[LaundryBatch]:
        """Most recent batch that has not been picked up."""
        return self.store.batches.find_one(
            [Filter.eq("student_id", student_id), Filter("status", "ne", BatchStatus.PICKED_UP)],
            order_by=Sort.desc("created_at"),
        )

    def get_all_batches(self) -> List[Dict[str, Any]]:
        batches = self.store.batches.find(order_by=Sort.desc("created_at"))
        students = self.store.users.find_by_ids(batch.student_id for batch in batches)
        return [batch_to_dict(batch, students.get(batch.student_id)) for batch in batches]

    @staticmethod
    def filter_batches(
        batches: Iterable[Dict[str, Any]],
        block: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[BatchStatus] = None,
    ) -> List[Dict[str, Any]]:
        """Staff dashboard filter over batches joined with their students."""
        term = (search or "").strip().lower()
        results = []
        for batch in batches:
            student = batch.get("student") or {}
            if block and block != "all" and student.get("block") != block:
                continue
            if status and batch["status"] != status:
                continue
            if term:
                haystack = (
                    batch["batch_number"],
                    student.get("full_name") or "",
                    student.get("room_number") or "",
                )
                if not any(term in value.lower() for value in haystack):
                    continue
            results.append(batch)
        return results

    def list_batches(
        self,
        block: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[BatchStatus] = None,
    ) -> List[Dict[str, Any]]:
        return self.filter_batches(self.get_all_batches(), block=block, search=search, status=status)

    def get_batch_stats(self, today: Optional[date] = None) -> Dict[str, Any]:
        today = today or DateTimeHelper.today()
        batches = self.store.batches.find()
        by_status = {status.value: 0 for status in BatchStatus}
        for batch in batches:
            by_status[BatchStatus(batch.status).value] += 1
        return {
            "total": len(batches),
            "active": len(batches) - by_status[BatchStatus.PICKED_UP.value],
            "today": sum(1 for batch in batches if batch.scheduled_date == today),
            "ready_for_pickup": by_status[BatchStatus.READY_FOR_PICKUP.value],
            "by_status": by_status,
        }

    # ==================== Lifecycle controller ====================

    def update_batch_status(
        self,
        batch_id: str,
        status: BatchStatus,
        staff_id: str,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Move a batch to ``status``.

        Stamps the timestamp that belongs to the new status, overwrites the
        staff notes only when a non-empty note is given, records one
        status_change activity and, for ready_for_pickup, notifies the
        student by email. Store errors propagate; notification errors are
        logged and dropped so they never undo or block the status change.
        """
        status = BatchStatus(status)
        batch = self.get_batch(batch_id)
        previous = BatchStatus(batch.status)
        validate_transition(previous, status, strict=self.settings.STRICT_STATUS_TRANSITIONS)

        changes: Dict[str, Any] = {"status": status}
        timestamp_field = STATUS_TIMESTAMP_FIELDS.get(status)
        if timestamp_field:
            changes[timestamp_field] = utcnow()
        if notes and notes.strip():
            changes["staff_notes"] = notes

        updated = self.store.batches.update(batch_id, changes)
        if updated is None:
            raise ResourceNotFoundError("Laundry batch", batch_id)

        self._logger.info(
            f"Batch {updated.batch_number} status {previous.value} -> {status.value}",
            extra={"batch_id": batch_id, "staff_id": staff_id},
        )
        self.activity.log_activity(
            staff_id,
            ActivityType.STATUS_CHANGE,
            f"Updated batch {updated.batch_number} status to {status.value}",
            {"batchId": batch_id, "status": status.value, "notes": notes},
        )

        student = self.store.users.get_by_id(updated.student_id)
        if status == BatchStatus.READY_FOR_PICKUP:
            if student is not None and student.email:
                try:
                    self.dispatcher.send_notification(
                        student.id,
                        updated.id,
                        NotificationChannel.EMAIL,
                        READY_FOR_PICKUP_MESSAGE.format(batch_number=updated.batch_number),
                    )
                except Exception as e:
                    self._logger.error(
                        f"Ready-for-pickup notification for batch {updated.batch_number} failed: {e}",
                        exc_info=True,
                    )
            else:
                self._logger.info(f"No email on file for batch {updated.batch_number}; notification skipped")

        return batch_to_dict(updated, student)
