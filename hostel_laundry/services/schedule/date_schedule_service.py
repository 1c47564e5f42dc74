"""
One-off schedule overrides for a specific calendar date.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from hostel_laundry.config.settings import Settings
from hostel_laundry.core.exceptions import EntityAlreadyExistsError, ResourceNotFoundError
from hostel_laundry.models import DateSchedule
from hostel_laundry.models.base import ActivityType
from hostel_laundry.repositories.base import Filter, Sort
from hostel_laundry.repositories.data_store import DataStore
from hostel_laundry.services.activity.activity_service import ActivityService
from hostel_laundry.services.base.base_service import BaseService
from hostel_laundry.services.schedule.schedule_service import normalize_schedule_times, partial_changes
from hostel_laundry.utils.datetime_utils import DateTimeHelper

DUPLICATE_SLOT_MESSAGE = "A schedule for this block, floor and date already exists"

DATE_FIELDS = (
    "block",
    "floor_number",
    "schedule_date",
    "pickup_time",
    "dropoff_start_time",
    "dropoff_end_time",
    "is_active",
    "is_holiday",
    "holiday_name",
    "max_batches_per_day",
    "notes",
)


class DateScheduleService(BaseService):
    def __init__(
        self,
        store: DataStore,
        activity_service: Optional[ActivityService] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(store, config)
        self.activity = activity_service or ActivityService(store, config)

    def _log_change(self, actor_id: Optional[str], verb: str, schedule: DateSchedule) -> None:
        if not actor_id:
            return
        self.activity.log_activity(
            actor_id,
            ActivityType.SCHEDULE_UPDATE,
            f"{verb} date schedule for Block {schedule.block} Floor {schedule.floor_number} "
            f"on {schedule.schedule_date.isoformat()}",
            {"dateScheduleId": schedule.id, "date": schedule.schedule_date.isoformat()},
        )

    def get_date_schedule(self, schedule_id: str) -> DateSchedule:
        schedule = self.store.date_schedules.get_by_id(schedule_id)
        if schedule is None:
            raise ResourceNotFoundError("Date schedule", schedule_id, message="Date schedule not found")
        return schedule

    def list_date_schedules(self) -> List[DateSchedule]:
        return self.store.date_schedules.find(
            order_by=[Sort.desc("schedule_date"), Sort("block"), Sort("floor_number")]
        )

    def list_upcoming(self, today: Optional[date] = None) -> List[DateSchedule]:
        return self.store.date_schedules.find(
            [Filter("schedule_date", "gte", today or DateTimeHelper.today())],
            order_by=[Sort("schedule_date"), Sort("block"), Sort("floor_number")],
        )

    def create_date_schedule(self, data: Dict[str, Any], actor_id: Optional[str] = None) -> DateSchedule:
        data = normalize_schedule_times({k: v for k, v in data.items() if k in DATE_FIELDS and v is not None})
        self._require(data, ("block", "floor_number", "schedule_date", "pickup_time"))
        data.setdefault("max_batches_per_day", self.settings.DEFAULT_MAX_BATCHES_PER_DAY)
        data["created_by"] = actor_id
        data["updated_by"] = actor_id

        try:
            schedule = self.store.date_schedules.create(data)
        except EntityAlreadyExistsError as e:
            raise EntityAlreadyExistsError(DUPLICATE_SLOT_MESSAGE, table=e.details.get("table"))

        self._log_change(actor_id, "Created", schedule)
        return schedule

    def update_date_schedule(
        self,
        schedule_id: str,
        data: Dict[str, Any],
        actor_id: Optional[str] = None,
    ) -> DateSchedule:
        self.get_date_schedule(schedule_id)
        changes = partial_changes(data, DATE_FIELDS)
        changes["updated_by"] = actor_id

        try:
            schedule = self.store.date_schedules.update(schedule_id, changes)
        except EntityAlreadyExistsError as e:
            raise EntityAlreadyExistsError(DUPLICATE_SLOT_MESSAGE, table=e.details.get("table"))
        if schedule is None:
            raise ResourceNotFoundError("Date schedule", schedule_id, message="Date schedule not found")

        self._log_change(actor_id, "Updated", schedule)
        return schedule

    def delete_date_schedule(self, schedule_id: str, actor_id: Optional[str] = None) -> None:
        schedule = self.get_date_schedule(schedule_id)
        self.store.date_schedules.delete(schedule_id)
        self._log_change(actor_id, "Deleted", schedule)

    def toggle_status(
        self,
        schedule_id: str,
        is_active: Optional[bool] = None,
        actor_id: Optional[str] = None,
    ) -> DateSchedule:
        """Set the active flag, or flip it when no value is given"""
        current = self.get_date_schedule(schedule_id)
        target = (not current.is_active) if is_active is None else bool(is_active)
        schedule = self.store.date_schedules.update(schedule_id, {"is_active": target, "updated_by": actor_id})
        self._log_change(actor_id, "Activated" if target else "Deactivated", schedule)
        return schedule
