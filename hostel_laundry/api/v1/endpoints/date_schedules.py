"""
Date-specific schedule endpoints (holidays and one-off changes).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from hostel_laundry.api import deps
from hostel_laundry.models import User
from hostel_laundry.schemas.common import MessageResponse
from hostel_laundry.schemas.schedule import (
    DateScheduleCreate,
    DateScheduleResponse,
    DateScheduleToggle,
    DateScheduleUpdate,
)
from hostel_laundry.services.schedule.date_schedule_service import DateScheduleService

router = APIRouter(prefix="/date-schedules", tags=["Date Schedules"])


@router.get("", response_model=List[DateScheduleResponse])
def list_date_schedules(
    _: User = Depends(deps.get_current_user),
    service: DateScheduleService = Depends(deps.get_date_schedule_service),
):
    return service.list_date_schedules()


@router.get("/upcoming", response_model=List[DateScheduleResponse])
def list_upcoming_date_schedules(
    _: User = Depends(deps.get_current_user),
    service: DateScheduleService = Depends(deps.get_date_schedule_service),
):
    return service.list_upcoming()


@router.post("", response_model=DateScheduleResponse, status_code=status.HTTP_201_CREATED)
def create_date_schedule(
    payload: DateScheduleCreate,
    current_user: User = Depends(deps.get_admin_user),
    service: DateScheduleService = Depends(deps.get_date_schedule_service),
):
    return service.create_date_schedule(payload.model_dump(), actor_id=current_user.id)


@router.patch("/{schedule_id}", response_model=DateScheduleResponse)
def update_date_schedule(
    schedule_id: str,
    payload: DateScheduleUpdate,
    current_user: User = Depends(deps.get_admin_user),
    service: DateScheduleService = Depends(deps.get_date_schedule_service),
):
    return service.update_date_schedule(
        schedule_id, payload.model_dump(exclude_unset=True), actor_id=current_user.id
    )


@router.delete("/{schedule_id}", response_model=MessageResponse)
def delete_date_schedule(
    schedule_id: str,
    current_user: User = Depends(deps.get_admin_user),
    service: DateScheduleService = Depends(deps.get_date_schedule_service),
):
    service.delete_date_schedule(schedule_id, actor_id=current_user.id)
    return MessageResponse(message="Date schedule deleted")


@router.post("/{schedule_id}/toggle", response_model=DateScheduleResponse)
def toggle_date_schedule(
    schedule_id: str,
    payload: Optional[DateScheduleToggle] = None,
    current_user: User = Depends(deps.get_admin_user),
    service: DateScheduleService = Depends(deps.get_date_schedule_service),
):
    is_active = payload.is_active if payload is not None else None
    return service.toggle_status(schedule_id, is_active, actor_id=current_user.id)
