from hostel_laundry.schemas.activity.activity import ActivityLogResponse

__all__ = ["ActivityLogResponse"]
