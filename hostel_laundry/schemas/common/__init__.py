from hostel_laundry.schemas.common.base import (
    BaseCreateSchema,
    BaseDBSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
    TimestampMixin,
    UUIDMixin,
)
from hostel_laundry.schemas.common.response import (
    CountResponse,
    ErrorBody,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)

__all__ = [
    "BaseSchema",
    "TimestampMixin",
    "UUIDMixin",
    "BaseDBSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
    "MessageResponse",
    "CountResponse",
    "ErrorBody",
    "ErrorResponse",
    "HealthResponse",
]
