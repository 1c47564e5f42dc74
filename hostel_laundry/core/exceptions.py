"""
Custom Exceptions for the Hostel Laundry Application

This module defines the exception classes raised by repositories and services.
Each carries an error code and HTTP status so the API layer can render it
without knowing where it came from.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_FORMAT = "INVALID_FORMAT"

    # Storage errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    FOREIGN_KEY_VIOLATION = "FOREIGN_KEY_VIOLATION"

    # Business logic errors
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"

    # External service errors
    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id,
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


# ========================================
# Authentication & Authorization
# ========================================

class AuthenticationError(BaseAppException):
    """Exception raised when authentication fails"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 401)


class AuthorizationError(BaseAppException):
    """Exception raised when authorization fails"""

    def __init__(
        self,
        message: str = "Access denied",
        required_roles: Optional[List[str]] = None,
        error_code: ErrorCode = ErrorCode.AUTHORIZATION_FAILED
    ):
        details = {"required_roles": required_roles} if required_roles else {}
        super().__init__(message, error_code, details, 403)


class TokenError(AuthenticationError):
    """Exception raised for token-related authentication errors"""

    def __init__(
        self,
        message: str = "Invalid token",
        error_code: ErrorCode = ErrorCode.TOKEN_INVALID,
    ):
        super().__init__(message, error_code, {"token_type": "access_token"})


class TokenExpiredError(TokenError):
    """Exception raised when a token has expired"""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, ErrorCode.TOKEN_EXPIRED)


class InvalidTokenError(TokenError):
    """Exception raised when token is invalid"""

    def __init__(self, message: str = "Invalid token", reason: Optional[str] = None):
        super().__init__(message, ErrorCode.TOKEN_INVALID)
        if reason:
            self.details["reason"] = reason


# ========================================
# Storage Exceptions
# ========================================

class RepositoryError(BaseAppException):
    """Exception raised when a storage operation fails"""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        status_code: int = 500
    ):
        details = {
            "operation": operation,
            "table": table
        }
        super().__init__(message, error_code, details, status_code)


class EntityAlreadyExistsError(RepositoryError):
    """Exception raised when a unique constraint is violated"""

    def __init__(
        self,
        message: str = "Record already exists",
        table: Optional[str] = None,
        fields: Optional[List[str]] = None,
    ):
        super().__init__(
            message,
            operation="write",
            table=table,
            error_code=ErrorCode.DUPLICATE_ENTRY,
            status_code=409,
        )
        if fields:
            self.details["fields"] = fields


class InvalidReferenceError(RepositoryError):
    """Exception raised when a foreign key points at a missing row"""

    def __init__(
        self,
        message: str = "Invalid reference to related record",
        table: Optional[str] = None,
        field: Optional[str] = None,
    ):
        super().__init__(
            message,
            operation="write",
            table=table,
            error_code=ErrorCode.FOREIGN_KEY_VIOLATION,
            status_code=400,
        )
        if field:
            self.details["field"] = field


class InvalidFormatError(RepositoryError):
    """Exception raised when the store rejects a value's format"""

    def __init__(self, message: str = "Invalid data format", table: Optional[str] = None):
        super().__init__(
            message,
            operation="write",
            table=table,
            error_code=ErrorCode.INVALID_FORMAT,
            status_code=422,
        )


# ========================================
# Business Logic Exceptions
# ========================================

class InvalidStatusTransitionError(BaseAppException):
    """Exception raised when a batch status change is not an allowed edge"""

    def __init__(self, current_status: str, target_status: str, allowed: Optional[List[str]] = None):
        message = f"Cannot change batch status from {current_status} to {target_status}"
        details = {
            "current_status": current_status,
            "target_status": target_status,
            "allowed": allowed or [],
        }
        super().__init__(message, ErrorCode.INVALID_STATUS_TRANSITION, details, 409)


# ========================================
# External Service Exceptions
# ========================================

class NotificationError(BaseAppException):
    """Exception raised when a notification could not be dispatched"""

    def __init__(
        self,
        message: str = "Notification dispatch failed",
        channel: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.NOTIFICATION_FAILED
    ):
        details = {"channel": channel} if channel else {}
        super().__init__(message, error_code, details, 502)
