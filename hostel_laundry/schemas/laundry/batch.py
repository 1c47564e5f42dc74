"""
Laundry batch schemas.
"""

from datetime import date, datetime
from typing import Dict, Optional

from pydantic import Field

from hostel_laundry.models.base import BatchStatus
from hostel_laundry.schemas.auth.user import UserSummary
from hostel_laundry.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "BatchCreate",
    "BatchStatusUpdate",
    "BatchResponse",
    "BatchStats",
]


class BatchCreate(BaseCreateSchema):
    scheduled_date: date
    student_id: Optional[str] = Field(
        default=None,
        description="Required for staff and admins; students always create for themselves",
    )


class BatchStatusUpdate(BaseSchema):
    status: BatchStatus
    notes: Optional[str] = Field(default=None, max_length=2000)


class BatchResponse(BaseResponseSchema):
    student_id: str
    batch_number: str
    status: BatchStatus
    scheduled_date: date
    dropped_off_at: Optional[datetime] = None
    ready_at: Optional[datetime] = None
    picked_up_at: Optional[datetime] = None
    staff_notes: Optional[str] = None
    student: Optional[UserSummary] = None


class BatchStats(BaseSchema):
    total: int
    active: int
    today: int
    ready_for_pickup: int
    by_status: Dict[str, int]
