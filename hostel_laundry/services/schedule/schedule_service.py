"""
Weekly pickup schedules and the views built on them.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from hostel_laundry.config.settings import Settings
from hostel_laundry.core.exceptions import ResourceNotFoundError, ValidationError
from hostel_laundry.models import DateSchedule, LaundrySchedule
from hostel_laundry.models.base import ActivityType, BatchStatus, UserRole, Weekday
from hostel_laundry.repositories.base import Filter, Sort
from hostel_laundry.repositories.data_store import DataStore
from hostel_laundry.services.activity.activity_service import ActivityService
from hostel_laundry.services.base.base_service import BaseService
from hostel_laundry.utils.datetime_utils import WEEKDAY_NAMES, DateTimeHelper

TIME_FIELDS = ("pickup_time", "dropoff_start_time", "dropoff_end_time")

WEEKLY_FIELDS = (
    "block",
    "floor_number",
    "scheduled_day",
    "pickup_time",
    "dropoff_start_time",
    "dropoff_end_time",
    "is_active",
    "max_batches_per_day",
)

# Nullable columns a partial update may set back to null
CLEARABLE_FIELDS = ("dropoff_start_time", "dropoff_end_time", "holiday_name", "notes", "description")


def normalize_schedule_times(data: Dict[str, Any]) -> Dict[str, Any]:
    """Accept HH:MM or HH:MM:SS strings for the time columns"""
    normalized = dict(data)
    for field in TIME_FIELDS:
        value = normalized.get(field)
        if value is None:
            continue
        try:
            normalized[field] = DateTimeHelper.parse_time(value)
        except ValueError as e:
            raise ValidationError(str(e), field_errors={field: [str(e)]})
    return normalized


def partial_changes(data: Dict[str, Any], fields) -> Dict[str, Any]:
    """Writable fields of a PATCH payload; null clears only the nullable columns"""
    return normalize_schedule_times(
        {k: v for k, v in data.items() if k in fields and (v is not None or k in CLEARABLE_FIELDS)}
    )


def weekday_index(day) -> int:
    return WEEKDAY_NAMES.index(Weekday(day).value)


def weekly_schedule_to_dict(schedule: LaundrySchedule) -> Dict[str, Any]:
    return {
        "id": schedule.id,
        "block": schedule.block,
        "floor_number": schedule.floor_number,
        "scheduled_day": schedule.scheduled_day,
        "schedule_date": None,
        "pickup_time": schedule.pickup_time,
        "dropoff_start_time": schedule.dropoff_start_time,
        "dropoff_end_time": schedule.dropoff_end_time,
        "is_active": schedule.is_active,
        "max_batches_per_day": schedule.max_batches_per_day,
        "is_holiday": False,
        "holiday_name": None,
        "notes": None,
        "is_date_specific": False,
    }


def date_schedule_to_dict(schedule: DateSchedule) -> Dict[str, Any]:
    return {
        "id": schedule.id,
        "block": schedule.block,
        "floor_number": schedule.floor_number,
        "scheduled_day": Weekday(DateTimeHelper.weekday_name(schedule.schedule_date)),
        "schedule_date": schedule.schedule_date,
        "pickup_time": schedule.pickup_time,
        "dropoff_start_time": schedule.dropoff_start_time,
        "dropoff_end_time": schedule.dropoff_end_time,
        "is_active": schedule.is_active,
        "max_batches_per_day": schedule.max_batches_per_day,
        "is_holiday": schedule.is_holiday,
        "holiday_name": schedule.holiday_name,
        "notes": schedule.notes,
        "is_date_specific": True,
    }


class ScheduleService(BaseService):
    """Weekly schedule CRUD plus the combined and effective schedule views."""

    def __init__(
        self,
        store: DataStore,
        activity_service: Optional[ActivityService] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(store, config)
        self.activity = activity_service or ActivityService(store, config)

    @staticmethod
    def _sorted(schedules: List[LaundrySchedule]) -> List[LaundrySchedule]:
        return sorted(schedules, key=lambda s: (s.block, s.floor_number, weekday_index(s.scheduled_day)))

    def _log_change(self, actor_id: Optional[str], verb: str, schedule: LaundrySchedule, extra: Optional[Dict] = None):
        if not actor_id:
            return
        metadata = {"scheduleId": schedule.id, "block": schedule.block, "floor": schedule.floor_number}
        metadata.update(extra or {})
        self.activity.log_activity(
            actor_id,
            ActivityType.SCHEDULE_UPDATE,
            f"{verb} schedule for Block {schedule.block} Floor {schedule.floor_number}",
            metadata,
        )

    # ==================== Reads ====================

    def get_schedule(self, schedule_id: str) -> LaundrySchedule:
        schedule = self.store.schedules.get_by_id(schedule_id)
        if schedule is None:
            raise ResourceNotFoundError("Schedule", schedule_id, message="Schedule not found")
        return schedule

    def find_schedules_for(self, block: str, floor_number: int) -> List[LaundrySchedule]:
        """Every active weekly slot of a block and floor, Monday first."""
        return self._sorted(
            self.store.schedules.find({"block": block, "floor_number": floor_number, "is_active": True})
        )

    def find_schedule_on(self, block: str, floor_number: int, on_date: date) -> Optional[LaundrySchedule]:
        """The active weekly slot whose day matches ``on_date``, if any."""
        return self.store.schedules.find_one(
            {
                "block": block,
                "floor_number": floor_number,
                "is_active": True,
                "scheduled_day": Weekday(DateTimeHelper.weekday_name(on_date)),
            },
            order_by=Sort.desc("updated_at"),
        )

    def get_schedules_for(self, block: str, floor_number: int) -> List[LaundrySchedule]:
        schedules = self.find_schedules_for(block, floor_number)
        if not schedules:
            raise ResourceNotFoundError(
                "Schedule",
                message=f"No active schedule for Block {block} Floor {floor_number}",
            )
        return schedules

    def list_schedules(self) -> List[LaundrySchedule]:
        return self._sorted(self.store.schedules.find())

    def list_schedules_by_block(self, block: str) -> List[LaundrySchedule]:
        return self._sorted(self.store.schedules.find({"block": block}))

    # ==================== Writes ====================

    def create_schedule(self, data: Dict[str, Any], actor_id: Optional[str] = None) -> LaundrySchedule:
        data = normalize_schedule_times({k: v for k, v in data.items() if k in WEEKLY_FIELDS and v is not None})
        self._require(data, ("block", "floor_number", "scheduled_day", "pickup_time"))
        data.setdefault("max_batches_per_day", self.settings.DEFAULT_MAX_BATCHES_PER_DAY)
        data["created_by"] = actor_id
        data["updated_by"] = actor_id

        schedule = self.store.schedules.create(data)
        self._log_change(actor_id, "Created", schedule)
        return schedule

    def update_schedule(self, schedule_id: str, data: Dict[str, Any], actor_id: Optional[str] = None) -> LaundrySchedule:
        self.get_schedule(schedule_id)
        changes = partial_changes(data, WEEKLY_FIELDS)
        changes["updated_by"] = actor_id

        schedule = self.store.schedules.update(schedule_id, changes)
        if schedule is None:
            raise ResourceNotFoundError("Schedule", schedule_id, message="Schedule not found")
        self._log_change(actor_id, "Updated", schedule, {"updates": sorted(k for k in changes if k != "updated_by")})
        return schedule

    def delete_schedule(self, schedule_id: str, actor_id: Optional[str] = None) -> None:
        schedule = self.get_schedule(schedule_id)
        self.store.schedules.delete(schedule_id)
        self._log_change(actor_id, "Deleted", schedule)

    def toggle_schedule_status(self, schedule_id: str, is_active: bool, actor_id: Optional[str] = None) -> LaundrySchedule:
        self.get_schedule(schedule_id)
        schedule = self.store.schedules.update(schedule_id, {"is_active": bool(is_active), "updated_by": actor_id})
        self._log_change(actor_id, "Activated" if is_active else "Deactivated", schedule)
        return schedule

    # ==================== Views ====================

    def get_all_schedules(self, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Weekly schedules followed by date overrides from today onwards."""
        today = today or DateTimeHelper.today()
        weekly = [weekly_schedule_to_dict(s) for s in self.list_schedules()]
        upcoming = self.store.date_schedules.find(
            [Filter("schedule_date", "gte", today)],
            order_by=[Sort("schedule_date"), Sort("block"), Sort("floor_number")],
        )
        return weekly + [date_schedule_to_dict(s) for s in upcoming]

    def next_pickup_date(self, block: str, floor_number: int, today: Optional[date] = None) -> Optional[date]:
        """Earliest date, today included, that falls on any active weekly slot."""
        start = today or DateTimeHelper.today()
        candidates = [
            DateTimeHelper.next_weekday(Weekday(s.scheduled_day).value, start)
            for s in self.find_schedules_for(block, floor_number)
        ]
        return min(candidates) if candidates else None

    def get_effective_schedule(self, block: str, floor_number: int, on_date: date) -> Dict[str, Any]:
        """
        Resolve what applies on one date: an active date override wins over
        the weekly schedule, and a holiday override means no pickup.
        """
        result: Dict[str, Any] = {
            "on_date": on_date,
            "block": block,
            "floor_number": floor_number,
            "has_pickup": False,
            "source": None,
            "is_holiday": False,
            "holiday_name": None,
            "schedule": None,
        }

        override = self.store.date_schedules.find_one(
            {"block": block, "floor_number": floor_number, "schedule_date": on_date, "is_active": True}
        )
        if override is not None:
            result.update(
                source="date",
                is_holiday=bool(override.is_holiday),
                holiday_name=override.holiday_name,
                has_pickup=not override.is_holiday,
                schedule=date_schedule_to_dict(override),
            )
            return result

        weekly = self.find_schedule_on(block, floor_number, on_date)
        if weekly is not None:
            result.update(source="weekly", has_pickup=True, schedule=weekly_schedule_to_dict(weekly))
        return result

    def get_schedule_overview(self) -> List[Dict[str, Any]]:
        """One row per weekly schedule with resident and open-batch counts."""
        schedules = self.list_schedules()
        students = self.store.users.find({"role": UserRole.STUDENT})
        open_batches = self.store.batches.find([Filter("status", "ne", BatchStatus.PICKED_UP)])

        open_by_student: Dict[str, int] = {}
        for batch in open_batches:
            open_by_student[batch.student_id] = open_by_student.get(batch.student_id, 0) + 1

        rows = []
        for schedule in schedules:
            residents = [
                s for s in students if s.block == schedule.block and s.floor_number == schedule.floor_number
            ]
            row = weekly_schedule_to_dict(schedule)
            row["student_count"] = len(residents)
            row["active_batch_count"] = sum(open_by_student.get(s.id, 0) for s in residents)
            rows.append(row)
        return rows
