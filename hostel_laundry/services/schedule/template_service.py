"""
Schedule templates: named sets of weekly slots that can be stamped onto
one or many block/floor combinations.
"""

from itertools import product
from typing import Any, Dict, List, Optional, Sequence

from hostel_laundry.config.settings import Settings
from hostel_laundry.core.exceptions import ResourceNotFoundError, ValidationError
from hostel_laundry.models import LaundrySchedule, ScheduleTemplate, TemplateSchedule
from hostel_laundry.models.base import ActivityType
from hostel_laundry.repositories.base import Sort
from hostel_laundry.repositories.data_store import DataStore
from hostel_laundry.services.activity.activity_service import ActivityService
from hostel_laundry.services.base.base_service import BaseService
from hostel_laundry.services.schedule.schedule_service import (
    normalize_schedule_times,
    partial_changes,
    weekday_index,
)

TEMPLATE_FIELDS = ("name", "description", "is_default")
TEMPLATE_SCHEDULE_FIELDS = ("scheduled_day", "pickup_time", "dropoff_start_time", "dropoff_end_time")


class TemplateService(BaseService):
    def __init__(
        self,
        store: DataStore,
        activity_service: Optional[ActivityService] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(store, config)
        self.activity = activity_service or ActivityService(store, config)

    # ==================== Templates ====================

    def get_template(self, template_id: str) -> ScheduleTemplate:
        template = self.store.templates.get_by_id(template_id)
        if template is None:
            raise ResourceNotFoundError("Schedule template", template_id, message="Template not found")
        return template

    def list_templates(self) -> List[ScheduleTemplate]:
        return self.store.templates.find(order_by=Sort("name"))

    def create_template(self, data: Dict[str, Any], actor_id: Optional[str] = None) -> ScheduleTemplate:
        values = {k: v for k, v in data.items() if k in TEMPLATE_FIELDS and v is not None}
        self._require(values, ("name",))
        values["created_by"] = actor_id
        return self.store.templates.create(values)

    def update_template(self, template_id: str, data: Dict[str, Any]) -> ScheduleTemplate:
        self.get_template(template_id)
        changes = partial_changes(data, TEMPLATE_FIELDS)
        template = self.store.templates.update(template_id, changes)
        if template is None:
            raise ResourceNotFoundError("Schedule template", template_id, message="Template not found")
        return template

    def delete_template(self, template_id: str) -> None:
        self.get_template(template_id)
        with self.transaction() as store:
            store.template_schedules.delete_where({"template_id": template_id}, commit=False)
            store.templates.delete(template_id, commit=False)
        self._logger.info(f"Deleted schedule template {template_id}")

    # ==================== Template slots ====================

    def list_template_schedules(self, template_id: str) -> List[TemplateSchedule]:
        self.get_template(template_id)
        rows = self.store.template_schedules.find({"template_id": template_id})
        return sorted(rows, key=lambda row: weekday_index(row.scheduled_day))

    def add_template_schedule(self, template_id: str, data: Dict[str, Any]) -> TemplateSchedule:
        self.get_template(template_id)
        values = normalize_schedule_times(
            {k: v for k, v in data.items() if k in TEMPLATE_SCHEDULE_FIELDS and v is not None}
        )
        self._require(values, ("scheduled_day", "pickup_time"))
        values["template_id"] = template_id
        return self.store.template_schedules.create(values)

    def update_template_schedule(self, template_schedule_id: str, data: Dict[str, Any]) -> TemplateSchedule:
        changes = partial_changes(data, TEMPLATE_SCHEDULE_FIELDS)
        row = self.store.template_schedules.update(template_schedule_id, changes)
        if row is None:
            raise ResourceNotFoundError("Template schedule", template_schedule_id)
        return row

    def delete_template_schedule(self, template_schedule_id: str) -> None:
        if not self.store.template_schedules.delete(template_schedule_id):
            raise ResourceNotFoundError("Template schedule", template_schedule_id)

    # ==================== Application ====================

    def _apply(
        self,
        store: DataStore,
        slots: Sequence[TemplateSchedule],
        block: str,
        floor_number: int,
        actor_id: Optional[str],
    ) -> List[LaundrySchedule]:
        """Upsert one weekly row per slot, keyed by block, floor and day"""
        applied = []
        for slot in slots:
            values = {
                "pickup_time": slot.pickup_time,
                "dropoff_start_time": slot.dropoff_start_time,
                "dropoff_end_time": slot.dropoff_end_time,
                "is_active": True,
                "updated_by": actor_id,
            }
            existing = store.schedules.find_one(
                {"block": block, "floor_number": floor_number, "scheduled_day": slot.scheduled_day}
            )
            if existing is not None:
                applied.append(store.schedules.update(existing.id, values, commit=False))
            else:
                values.update(
                    block=block,
                    floor_number=floor_number,
                    scheduled_day=slot.scheduled_day,
                    max_batches_per_day=self.settings.DEFAULT_MAX_BATCHES_PER_DAY,
                    created_by=actor_id,
                )
                applied.append(store.schedules.create(values, commit=False))
        return applied

    def _template_slots(self, template_id: str) -> Sequence[TemplateSchedule]:
        slots = self.list_template_schedules(template_id)
        if not slots:
            raise ValidationError("Template has no schedules to apply", field_errors={"template_id": ["Empty template"]})
        return slots

    def apply_template(
        self,
        template_id: str,
        block: str,
        floor_number: int,
        actor_id: Optional[str] = None,
    ) -> List[LaundrySchedule]:
        template = self.get_template(template_id)
        slots = self._template_slots(template_id)

        with self.transaction() as store:
            applied = self._apply(store, slots, block, floor_number, actor_id)

        if actor_id:
            self.activity.log_activity(
                actor_id,
                ActivityType.SCHEDULE_UPDATE,
                f"Applied template {template.name} to Block {block} Floor {floor_number}",
                {"templateId": template_id, "block": block, "floor": floor_number},
            )
        return applied

    def bulk_apply_template(
        self,
        template_id: str,
        blocks: Sequence[str],
        floors: Sequence[int],
        actor_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Apply a template to every block and floor combination atomically."""
        if not blocks or not floors:
            raise ValidationError(
                "At least one block and one floor are required",
                field_errors={"blocks": ["Required"], "floors": ["Required"]},
            )
        template = self.get_template(template_id)
        slots = self._template_slots(template_id)
        targets = list(product(dict.fromkeys(blocks), dict.fromkeys(floors)))

        applied: List[LaundrySchedule] = []
        with self.transaction() as store:
            for block, floor_number in targets:
                applied.extend(self._apply(store, slots, block, floor_number, actor_id))

        if actor_id:
            self.activity.log_activity(
                actor_id,
                ActivityType.SCHEDULE_UPDATE,
                f"Applied template {template.name} to {len(targets)} block/floor combinations",
                {"templateId": template_id, "blocks": list(blocks), "floors": list(floors)},
            )
        return {"template_id": template_id, "targets": len(targets), "schedules": applied}
