"""
API v1 Router - Main Entry Point
Aggregates all v1 endpoints of the laundry service
"""

from fastapi import APIRouter

from hostel_laundry.api.v1.endpoints import (
    activity_logs,
    auth,
    batches,
    date_schedules,
    health,
    notifications,
    schedules,
    templates,
    users,
)

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(health.router)
router.include_router(auth.router)
router.include_router(users.router)
router.include_router(batches.router)
router.include_router(schedules.router)
router.include_router(date_schedules.router)
router.include_router(templates.router)
router.include_router(notifications.router)
router.include_router(activity_logs.router)
