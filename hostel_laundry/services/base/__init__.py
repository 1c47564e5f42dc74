from hostel_laundry.services.base.base_service import BaseService, user_summary

__all__ = ["BaseService", "user_summary"]
