"""
Standard API response wrappers.
"""

from typing import Any, Dict, Optional

from pydantic import Field

from hostel_laundry.schemas.common.base import BaseSchema

__all__ = [
    "MessageResponse",
    "CountResponse",
    "ErrorBody",
    "ErrorResponse",
    "HealthResponse",
]


class MessageResponse(BaseSchema):
    """Simple message response."""

    success: bool = Field(default=True, description="Success flag")
    message: str = Field(..., description="Response message")


class CountResponse(BaseSchema):
    count: int = Field(..., ge=0)


class ErrorBody(BaseSchema):
    code: str = Field(..., description="Application error code")
    message: str = Field(..., description="Error message")
    details: Dict[str, Any] = Field(default_factory=dict)
    timestamp: Optional[str] = None
    request_id: Optional[str] = None


class ErrorResponse(BaseSchema):
    """Body of every error response."""

    error: ErrorBody


class HealthResponse(BaseSchema):
    status: str = Field(default="ok")
    app: str
    version: str
    environment: str
    storage: str = Field(..., description="'database' or 'demo'")
    email_configured: bool
