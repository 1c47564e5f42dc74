"""
Weekly and date-specific pickup schedule schemas.

Time fields accept ``HH:MM`` or ``HH:MM:SS``.
"""

from datetime import date, time
from typing import List, Optional

from pydantic import Field, model_validator

from hostel_laundry.models.base import Weekday
from hostel_laundry.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "ScheduleCreate",
    "ScheduleUpdate",
    "ScheduleResponse",
    "ScheduleToggle",
    "DateScheduleCreate",
    "DateScheduleUpdate",
    "DateScheduleResponse",
    "DateScheduleToggle",
    "ScheduleEntry",
    "ScheduleOverviewRow",
    "EffectiveSchedule",
    "StudentSchedule",
]


class DropoffWindowMixin(BaseSchema):
    @model_validator(mode="after")
    def check_dropoff_window(self):
        start, end = self.dropoff_start_time, self.dropoff_end_time
        if start is not None and end is not None and end <= start:
            raise ValueError("dropoff_end_time must be after dropoff_start_time")
        return self


class ScheduleCreate(BaseCreateSchema, DropoffWindowMixin):
    block: str = Field(..., min_length=1, max_length=10)
    floor_number: int = Field(..., ge=0)
    scheduled_day: Weekday
    pickup_time: time
    dropoff_start_time: Optional[time] = None
    dropoff_end_time: Optional[time] = None
    is_active: bool = True
    max_batches_per_day: Optional[int] = Field(default=None, ge=1)


class ScheduleUpdate(BaseUpdateSchema, DropoffWindowMixin):
    block: Optional[str] = Field(default=None, min_length=1, max_length=10)
    floor_number: Optional[int] = Field(default=None, ge=0)
    scheduled_day: Optional[Weekday] = None
    pickup_time: Optional[time] = None
    dropoff_start_time: Optional[time] = None
    dropoff_end_time: Optional[time] = None
    is_active: Optional[bool] = None
    max_batches_per_day: Optional[int] = Field(default=None, ge=1)


class ScheduleResponse(BaseResponseSchema):
    block: str
    floor_number: int
    scheduled_day: Weekday
    pickup_time: time
    dropoff_start_time: Optional[time] = None
    dropoff_end_time: Optional[time] = None
    is_active: bool
    max_batches_per_day: int
    created_by: Optional[str] = None
    updated_by: Optional[str] = None


class ScheduleToggle(BaseSchema):
    is_active: bool


class DateScheduleCreate(BaseCreateSchema, DropoffWindowMixin):
    block: str = Field(..., min_length=1, max_length=10)
    floor_number: int = Field(..., ge=0)
    schedule_date: date
    pickup_time: time
    dropoff_start_time: Optional[time] = None
    dropoff_end_time: Optional[time] = None
    is_active: bool = True
    is_holiday: bool = False
    holiday_name: Optional[str] = Field(default=None, max_length=255)
    max_batches_per_day: Optional[int] = Field(default=None, ge=1)
    notes: Optional[str] = None


class DateScheduleUpdate(BaseUpdateSchema, DropoffWindowMixin):
    block: Optional[str] = Field(default=None, min_length=1, max_length=10)
    floor_number: Optional[int] = Field(default=None, ge=0)
    schedule_date: Optional[date] = None
    pickup_time: Optional[time] = None
    dropoff_start_time: Optional[time] = None
    dropoff_end_time: Optional[time] = None
    is_active: Optional[bool] = None
    is_holiday: Optional[bool] = None
    holiday_name: Optional[str] = Field(default=None, max_length=255)
    max_batches_per_day: Optional[int] = Field(default=None, ge=1)
    notes: Optional[str] = None


class DateScheduleResponse(BaseResponseSchema):
    block: str
    floor_number: int
    schedule_date: date
    pickup_time: time
    dropoff_start_time: Optional[time] = None
    dropoff_end_time: Optional[time] = None
    is_active: bool
    is_holiday: bool
    holiday_name: Optional[str] = None
    max_batches_per_day: int
    notes: Optional[str] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None


class DateScheduleToggle(BaseSchema):
    """Omit ``is_active`` to flip the current value."""

    is_active: Optional[bool] = None


class ScheduleEntry(BaseSchema):
    """Weekly or date-specific row in the combined schedule listing"""

    id: str
    block: str
    floor_number: int
    scheduled_day: Weekday
    schedule_date: Optional[date] = None
    pickup_time: time
    dropoff_start_time: Optional[time] = None
    dropoff_end_time: Optional[time] = None
    is_active: bool
    max_batches_per_day: int
    is_holiday: bool = False
    holiday_name: Optional[str] = None
    notes: Optional[str] = None
    is_date_specific: bool


class ScheduleOverviewRow(ScheduleEntry):
    student_count: int
    active_batch_count: int


class EffectiveSchedule(BaseSchema):
    on_date: date
    block: str
    floor_number: int
    has_pickup: bool
    source: Optional[str] = Field(default=None, description="'date', 'weekly' or null")
    is_holiday: bool = False
    holiday_name: Optional[str] = None
    schedule: Optional[ScheduleEntry] = None


class StudentSchedule(BaseSchema):
    schedules: List[ScheduleResponse]
    next_pickup_date: Optional[date] = None
