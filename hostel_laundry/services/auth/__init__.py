from hostel_laundry.services.auth.auth_service import AuthService, profile_to_dict

__all__ = ["AuthService", "profile_to_dict"]
