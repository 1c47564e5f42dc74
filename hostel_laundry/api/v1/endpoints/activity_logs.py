"""
Audit trail endpoint.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from hostel_laundry.api import deps
from hostel_laundry.models import User
from hostel_laundry.schemas.activity import ActivityLogResponse
from hostel_laundry.services.activity.activity_service import ActivityService

router = APIRouter(prefix="/activity-logs", tags=["Activity Logs"])


@router.get("", response_model=List[ActivityLogResponse])
def list_activity_logs(
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    _: User = Depends(deps.get_admin_user),
    service: ActivityService = Depends(deps.get_activity_service),
):
    return service.list_recent(limit=limit)
