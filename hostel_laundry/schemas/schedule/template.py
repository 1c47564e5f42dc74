"""
Schedule template schemas.
"""

from datetime import time
from typing import List, Optional

from pydantic import Field

from hostel_laundry.models.base import Weekday
from hostel_laundry.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema, BaseUpdateSchema
from hostel_laundry.schemas.schedule.schedule import ScheduleResponse

__all__ = [
    "TemplateCreate",
    "TemplateUpdate",
    "TemplateResponse",
    "TemplateScheduleCreate",
    "TemplateScheduleUpdate",
    "TemplateScheduleResponse",
    "ApplyTemplateRequest",
    "BulkApplyTemplateRequest",
    "BulkApplyTemplateResponse",
]


class TemplateCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_default: bool = False


class TemplateUpdate(BaseUpdateSchema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_default: Optional[bool] = None


class TemplateResponse(BaseResponseSchema):
    name: str
    description: Optional[str] = None
    is_default: bool
    created_by: Optional[str] = None


class TemplateScheduleCreate(BaseCreateSchema):
    scheduled_day: Weekday
    pickup_time: time
    dropoff_start_time: Optional[time] = None
    dropoff_end_time: Optional[time] = None


class TemplateScheduleUpdate(BaseUpdateSchema):
    scheduled_day: Optional[Weekday] = None
    pickup_time: Optional[time] = None
    dropoff_start_time: Optional[time] = None
    dropoff_end_time: Optional[time] = None


class TemplateScheduleResponse(BaseSchema):
    id: str
    template_id: str
    scheduled_day: Weekday
    pickup_time: time
    dropoff_start_time: Optional[time] = None
    dropoff_end_time: Optional[time] = None


class ApplyTemplateRequest(BaseSchema):
    block: str = Field(..., min_length=1, max_length=10)
    floor_number: int = Field(..., ge=0)


class BulkApplyTemplateRequest(BaseSchema):
    template_id: str
    blocks: List[str] = Field(..., min_length=1)
    floors: List[int] = Field(..., min_length=1)


class BulkApplyTemplateResponse(BaseSchema):
    template_id: str
    targets: int
    schedules: List[ScheduleResponse]
