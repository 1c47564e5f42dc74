"""
Schedule template endpoints, including applying a template to one or
many block/floor combinations.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from hostel_laundry.api import deps
from hostel_laundry.models import User
from hostel_laundry.schemas.common import MessageResponse
from hostel_laundry.schemas.schedule import (
    ApplyTemplateRequest,
    BulkApplyTemplateRequest,
    BulkApplyTemplateResponse,
    ScheduleResponse,
    TemplateCreate,
    TemplateResponse,
    TemplateScheduleCreate,
    TemplateScheduleResponse,
    TemplateScheduleUpdate,
    TemplateUpdate,
)
from hostel_laundry.services.schedule.template_service import TemplateService

router = APIRouter(prefix="/templates", tags=["Schedule Templates"])


@router.get("", response_model=List[TemplateResponse])
def list_templates(
    _: User = Depends(deps.get_admin_user),
    service: TemplateService = Depends(deps.get_template_service),
):
    return service.list_templates()


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def create_template(
    payload: TemplateCreate,
    current_user: User = Depends(deps.get_admin_user),
    service: TemplateService = Depends(deps.get_template_service),
):
    return service.create_template(payload.model_dump(), actor_id=current_user.id)


@router.post("/bulk-apply", response_model=BulkApplyTemplateResponse)
def bulk_apply_template(
    payload: BulkApplyTemplateRequest,
    current_user: User = Depends(deps.get_admin_user),
    service: TemplateService = Depends(deps.get_template_service),
):
    return service.bulk_apply_template(payload.template_id, payload.blocks, payload.floors, actor_id=current_user.id)


@router.patch("/schedules/{template_schedule_id}", response_model=TemplateScheduleResponse)
def update_template_schedule(
    template_schedule_id: str,
    payload: TemplateScheduleUpdate,
    _: User = Depends(deps.get_admin_user),
    service: TemplateService = Depends(deps.get_template_service),
):
    return service.update_template_schedule(template_schedule_id, payload.model_dump(exclude_unset=True))


@router.delete("/schedules/{template_schedule_id}", response_model=MessageResponse)
def delete_template_schedule(
    template_schedule_id: str,
    _: User = Depends(deps.get_admin_user),
    service: TemplateService = Depends(deps.get_template_service),
):
    service.delete_template_schedule(template_schedule_id)
    return MessageResponse(message="Template schedule deleted")


@router.get("/{template_id}", response_model=TemplateResponse)
def get_template(
    template_id: str,
    _: User = Depends(deps.get_admin_user),
    service: TemplateService = Depends(deps.get_template_service),
):
    return service.get_template(template_id)


@router.patch("/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: str,
    payload: TemplateUpdate,
    _: User = Depends(deps.get_admin_user),
    service: TemplateService = Depends(deps.get_template_service),
):
    return service.update_template(template_id, payload.model_dump(exclude_unset=True))


@router.delete("/{template_id}", response_model=MessageResponse)
def delete_template(
    template_id: str,
    _: User = Depends(deps.get_admin_user),
    service: TemplateService = Depends(deps.get_template_service),
):
    service.delete_template(template_id)
    return MessageResponse(message="Template deleted")


@router.get("/{template_id}/schedules", response_model=List[TemplateScheduleResponse])
def list_template_schedules(
    template_id: str,
    _: User = Depends(deps.get_admin_user),
    service: TemplateService = Depends(deps.get_template_service),
):
    return service.list_template_schedules(template_id)


@router.post(
    "/{template_id}/schedules",
    response_model=TemplateScheduleResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_template_schedule(
    template_id: str,
    payload: TemplateScheduleCreate,
    _: User = Depends(deps.get_admin_user),
    service: TemplateService = Depends(deps.get_template_service),
):
    return service.add_template_schedule(template_id, payload.model_dump())


@router.post("/{template_id}/apply", response_model=List[ScheduleResponse])
def apply_template(
    template_id: str,
    payload: ApplyTemplateRequest,
    current_user: User = Depends(deps.get_admin_user),
    service: TemplateService = Depends(deps.get_template_service),
):
    return service.apply_template(template_id, payload.block, payload.floor_number, actor_id=current_user.id)
