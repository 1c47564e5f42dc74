"""
Weekly pickup schedule endpoints.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from hostel_laundry.api import deps
from hostel_laundry.models import User
from hostel_laundry.schemas.common import MessageResponse
from hostel_laundry.schemas.schedule import (
    EffectiveSchedule,
    ScheduleCreate,
    ScheduleEntry,
    ScheduleOverviewRow,
    ScheduleResponse,
    ScheduleToggle,
    ScheduleUpdate,
    StudentSchedule,
)
from hostel_laundry.services.schedule.schedule_service import ScheduleService
from hostel_laundry.utils.datetime_utils import DateTimeHelper

router = APIRouter(prefix="/schedules", tags=["Schedules"])


@router.get("", response_model=List[ScheduleResponse])
def list_schedules(
    _: User = Depends(deps.get_admin_user),
    service: ScheduleService = Depends(deps.get_schedule_service),
):
    return service.list_schedules()


@router.get("/all", response_model=List[ScheduleEntry])
def list_all_schedules(
    _: User = Depends(deps.get_current_user),
    service: ScheduleService = Depends(deps.get_schedule_service),
):
    """Weekly schedules plus upcoming date-specific schedules"""
    return service.get_all_schedules()


@router.get("/overview", response_model=List[ScheduleOverviewRow])
def get_schedule_overview(
    _: User = Depends(deps.get_admin_user),
    service: ScheduleService = Depends(deps.get_schedule_service),
):
    return service.get_schedule_overview()


@router.get("/block/{block}", response_model=List[ScheduleResponse])
def list_block_schedules(
    block: str,
    _: User = Depends(deps.get_admin_user),
    service: ScheduleService = Depends(deps.get_schedule_service),
):
    return service.list_schedules_by_block(block)


@router.get("/mine", response_model=StudentSchedule)
def get_my_schedule(
    current_user: User = Depends(deps.get_student_user),
    service: ScheduleService = Depends(deps.get_schedule_service),
):
    schedules = service.get_schedules_for(current_user.block, current_user.floor_number)
    return {
        "schedules": schedules,
        "next_pickup_date": service.next_pickup_date(current_user.block, current_user.floor_number),
    }


@router.get("/effective", response_model=EffectiveSchedule)
def get_effective_schedule(
    block: Optional[str] = Query(default=None),
    floor: Optional[int] = Query(default=None, ge=0),
    on: Optional[date] = Query(default=None),
    current_user: User = Depends(deps.get_current_user),
    service: ScheduleService = Depends(deps.get_schedule_service),
):
    """Defaults to the caller's own block and floor, today"""
    return service.get_effective_schedule(
        block or current_user.block,
        floor if floor is not None else current_user.floor_number,
        on or DateTimeHelper.today(),
    )


@router.post("", response_model=ScheduleResponse, status_code=status.HTTP_201_CREATED)
def create_schedule(
    payload: ScheduleCreate,
    current_user: User = Depends(deps.get_admin_user),
    service: ScheduleService = Depends(deps.get_schedule_service),
):
    return service.create_schedule(payload.model_dump(), actor_id=current_user.id)


@router.patch("/{schedule_id}", response_model=ScheduleResponse)
def update_schedule(
    schedule_id: str,
    payload: ScheduleUpdate,
    current_user: User = Depends(deps.get_admin_user),
    service: ScheduleService = Depends(deps.get_schedule_service),
):
    return service.update_schedule(schedule_id, payload.model_dump(exclude_unset=True), actor_id=current_user.id)


@router.delete("/{schedule_id}", response_model=MessageResponse)
def delete_schedule(
    schedule_id: str,
    current_user: User = Depends(deps.get_admin_user),
    service: ScheduleService = Depends(deps.get_schedule_service),
):
    service.delete_schedule(schedule_id, actor_id=current_user.id)
    return MessageResponse(message="Schedule deleted")


@router.post("/{schedule_id}/toggle", response_model=ScheduleResponse)
def toggle_schedule(
    schedule_id: str,
    payload: ScheduleToggle,
    current_user: User = Depends(deps.get_admin_user),
    service: ScheduleService = Depends(deps.get_schedule_service),
):
    return service.toggle_schedule_status(schedule_id, payload.is_active, actor_id=current_user.id)
