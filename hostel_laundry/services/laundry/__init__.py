from hostel_laundry.services.laundry.batch_number import BatchNumberGenerator, default_generator
from hostel_laundry.services.laundry.batch_service import BatchService, batch_to_dict
from hostel_laundry.services.laundry.status_transitions import (
    ALLOWED_TRANSITIONS,
    STATUS_TIMESTAMP_FIELDS,
    allowed_targets,
    is_allowed,
    validate_transition,
)

__all__ = [
    "BatchService",
    "batch_to_dict",
    "BatchNumberGenerator",
    "default_generator",
    "ALLOWED_TRANSITIONS",
    "STATUS_TIMESTAMP_FIELDS",
    "allowed_targets",
    "is_allowed",
    "validate_transition",
]
