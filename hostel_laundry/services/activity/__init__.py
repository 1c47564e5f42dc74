from hostel_laundry.services.activity.activity_service import ActivityService

__all__ = ["ActivityService"]
