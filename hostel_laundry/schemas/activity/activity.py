"""
Activity log schemas.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from hostel_laundry.models.base import ActivityType
from hostel_laundry.schemas.auth.user import UserSummary
from hostel_laundry.schemas.common.base import BaseSchema

__all__ = ["ActivityLogResponse"]


class ActivityLogResponse(BaseSchema):
    id: str
    user_id: str
    activity_type: ActivityType
    description: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    user: Optional[UserSummary] = None
