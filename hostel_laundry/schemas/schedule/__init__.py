from hostel_laundry.schemas.schedule.schedule import (
    DateScheduleCreate,
    DateScheduleResponse,
    DateScheduleToggle,
    DateScheduleUpdate,
    EffectiveSchedule,
    ScheduleCreate,
    ScheduleEntry,
    ScheduleOverviewRow,
    ScheduleResponse,
    ScheduleToggle,
    ScheduleUpdate,
    StudentSchedule,
)
from hostel_laundry.schemas.schedule.template import (
    ApplyTemplateRequest,
    BulkApplyTemplateRequest,
    BulkApplyTemplateResponse,
    TemplateCreate,
    TemplateResponse,
    TemplateScheduleCreate,
    TemplateScheduleResponse,
    TemplateScheduleUpdate,
    TemplateUpdate,
)

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
