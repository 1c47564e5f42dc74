"""
Laundry batch endpoints.

Students see and create only their own batches; staff and admins manage
every batch and drive the status lifecycle.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from hostel_laundry.api import deps
from hostel_laundry.core.exceptions import ResourceNotFoundError, ValidationError
from hostel_laundry.models import User
from hostel_laundry.models.base import BatchStatus
from hostel_laundry.schemas.laundry import BatchCreate, BatchResponse, BatchStats, BatchStatusUpdate
from hostel_laundry.schemas.notification import NotificationResponse
from hostel_laundry.services.laundry.batch_service import BatchService, batch_to_dict
from hostel_laundry.services.notification.notification_service import NotificationService

router = APIRouter(prefix="/batches", tags=["Laundry Batches"])


@router.post("", response_model=BatchResponse, status_code=status.HTTP_201_CREATED)
def create_batch(
    payload: BatchCreate,
    current_user: User = Depends(deps.get_current_user),
    service: BatchService = Depends(deps.get_batch_service),
):
    if deps.is_staff(current_user):
        if not payload.student_id:
            raise ValidationError("student_id is required", field_errors={"student_id": ["Required"]})
        student_id = payload.student_id
    else:
        student_id = current_user.id
    batch = service.create_batch(student_id, payload.scheduled_date)
    return service.get_batch_with_student(batch.id)


@router.get("", response_model=List[BatchResponse])
def list_batches(
    block: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    status_filter: Optional[BatchStatus] = Query(default=None, alias="status"),
    _: User = Depends(deps.get_staff_user),
    service: BatchService = Depends(deps.get_batch_service),
):
    return service.list_batches(block=block, search=search, status=status_filter)


@router.get("/mine", response_model=List[BatchResponse])
def list_my_batches(
    current_user: User = Depends(deps.get_student_user),
    service: BatchService = Depends(deps.get_batch_service),
):
    return [batch_to_dict(batch, current_user) for batch in service.get_student_batches(current_user.id)]


@router.get("/mine/active", response_model=Optional[BatchResponse])
def get_my_active_batch(
    current_user: User = Depends(deps.get_student_user),
    service: BatchService = Depends(deps.get_batch_service),
):
    batch = service.get_active_batch(current_user.id)
    return batch_to_dict(batch, current_user) if batch is not None else None


@router.get("/stats", response_model=BatchStats)
def get_batch_stats(
    _: User = Depends(deps.get_staff_user),
    service: BatchService = Depends(deps.get_batch_service),
):
    return service.get_batch_stats()


@router.get("/{batch_id}", response_model=BatchResponse)
def get_batch(
    batch_id: str,
    current_user: User = Depends(deps.get_current_user),
    service: BatchService = Depends(deps.get_batch_service),
):
    batch = service.get_batch_with_student(batch_id)
    # Students cannot tell other students' batches from missing ones
    if not deps.is_staff(current_user) and batch["student_id"] != current_user.id:
        raise ResourceNotFoundError("Laundry batch", batch_id)
    return batch


@router.patch("/{batch_id}/status", response_model=BatchResponse)
def update_batch_status(
    batch_id: str,
    payload: BatchStatusUpdate,
    current_user: User = Depends(deps.get_staff_user),
    service: BatchService = Depends(deps.get_batch_service),
):
    return service.update_batch_status(batch_id, payload.status, current_user.id, payload.notes)


@router.post("/{batch_id}/reminder", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
def send_pickup_reminder(
    batch_id: str,
    _: User = Depends(deps.get_staff_user),
    service: NotificationService = Depends(deps.get_notification_service),
):
    return service.send_pickup_reminder(batch_id)
