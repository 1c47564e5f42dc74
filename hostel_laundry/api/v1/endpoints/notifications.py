"""
Notification inbox and bulk announcement endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from hostel_laundry.api import deps
from hostel_laundry.models import User
from hostel_laundry.schemas.common import CountResponse
from hostel_laundry.schemas.notification import (
    BulkNotificationRequest,
    BulkNotificationResponse,
    MarkAllReadResponse,
    NotificationResponse,
)
from hostel_laundry.services.notification.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    current_user: User = Depends(deps.get_current_user),
    service: NotificationService = Depends(deps.get_notification_service),
):
    return service.get_user_notifications(current_user.id, limit=limit)


@router.get("/unread-count", response_model=CountResponse)
def get_unread_count(
    current_user: User = Depends(deps.get_current_user),
    service: NotificationService = Depends(deps.get_notification_service),
):
    return CountResponse(count=service.get_unread_count(current_user.id))


@router.post("/read-all", response_model=MarkAllReadResponse)
def mark_all_as_read(
    current_user: User = Depends(deps.get_current_user),
    service: NotificationService = Depends(deps.get_notification_service),
):
    return MarkAllReadResponse(updated=service.mark_all_as_read(current_user.id))


@router.post("/bulk", response_model=BulkNotificationResponse, status_code=status.HTTP_201_CREATED)
def send_bulk_notification(
    payload: BulkNotificationRequest,
    current_user: User = Depends(deps.get_admin_user),
    service: NotificationService = Depends(deps.get_notification_service),
):
    return service.send_bulk_notification(current_user.id, payload.user_ids, payload.message, payload.channel)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_as_read(
    notification_id: str,
    current_user: User = Depends(deps.get_current_user),
    service: NotificationService = Depends(deps.get_notification_service),
):
    return service.mark_as_read(notification_id, current_user.id)
