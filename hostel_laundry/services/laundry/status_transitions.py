"""
Batch status state machine.

The lifecycle is linear: scheduled, dropped_off, washing, ready_for_pickup,
picked_up. Re-setting the current status is always allowed. Other moves are
accepted with a warning unless strict checking is enabled.
"""

from typing import Dict, FrozenSet, List

from hostel_laundry.core.exceptions import InvalidStatusTransitionError
from hostel_laundry.core.logging import get_logger
from hostel_laundry.models.base import BatchStatus

logger = get_logger(__name__)

ALLOWED_TRANSITIONS: Dict[BatchStatus, FrozenSet[BatchStatus]] = {
    BatchStatus.SCHEDULED: frozenset({BatchStatus.DROPPED_OFF}),
    BatchStatus.DROPPED_OFF: frozenset({BatchStatus.WASHING}),
    BatchStatus.WASHING: frozenset({BatchStatus.READY_FOR_PICKUP}),
    BatchStatus.READY_FOR_PICKUP: frozenset({BatchStatus.PICKED_UP}),
    BatchStatus.PICKED_UP: frozenset(),
}

# Timestamp column stamped when a batch enters the status
STATUS_TIMESTAMP_FIELDS: Dict[BatchStatus, str] = {
    BatchStatus.DROPPED_OFF: "dropped_off_at",
    BatchStatus.READY_FOR_PICKUP: "ready_at",
    BatchStatus.PICKED_UP: "picked_up_at",
}


def allowed_targets(current: BatchStatus) -> List[BatchStatus]:
    current = BatchStatus(current)
    return [current] + sorted(ALLOWED_TRANSITIONS[current], key=list(BatchStatus).index)


def is_allowed(current: BatchStatus, target: BatchStatus) -> bool:
    current, target = BatchStatus(current), BatchStatus(target)
    return target == current or target in ALLOWED_TRANSITIONS[current]


def validate_transition(current: BatchStatus, target: BatchStatus, strict: bool = False) -> bool:
    """
    Check a status change against the adjacency table.

    Returns True when the move is on the table. Off-table moves raise
    InvalidStatusTransitionError in strict mode and return False otherwise.
    """
    current, target = BatchStatus(current), BatchStatus(target)
    if is_allowed(current, target):
        return True

    allowed = [status.value for status in allowed_targets(current)]
    if strict:
        raise InvalidStatusTransitionError(current.value, target.value, allowed)

    logger.warning(
        f"Out-of-sequence batch status change {current.value} -> {target.value}",
        extra={"allowed_targets": allowed},
    )
    return False
