import pytest

from hostel_laundry.core.exceptions import InvalidStatusTransitionError
from hostel_laundry.models.base import BatchStatus
from hostel_laundry.services.laundry.status_transitions import allowed_targets, is_allowed, validate_transition

FORWARD = [
    (BatchStatus.SCHEDULED, BatchStatus.DROPPED_OFF),
    (BatchStatus.DROPPED_OFF, BatchStatus.WASHING),
    (BatchStatus.WASHING, BatchStatus.READY_FOR_PICKUP),
    (BatchStatus.READY_FOR_PICKUP, BatchStatus.PICKED_UP),
]


@pytest.mark.parametrize("current,target", FORWARD)
def test_forward_edges_are_allowed(current, target):
    assert is_allowed(current, target)
    assert validate_transition(current, target, strict=True) is True


@pytest.mark.parametrize("status", list(BatchStatus))
def test_resetting_current_status_is_allowed(status):
    assert validate_transition(status, status, strict=True) is True


def test_picked_up_is_terminal():
    assert allowed_targets(BatchStatus.PICKED_UP) == [BatchStatus.PICKED_UP]
    with pytest.raises(InvalidStatusTransitionError) as exc_info:
        validate_transition(BatchStatus.PICKED_UP, BatchStatus.WASHING, strict=True)
    assert exc_info.value.status_code == 409
    assert exc_info.value.details["allowed"] == ["picked_up"]


def test_skipping_ahead_is_rejected_only_in_strict_mode():
    assert validate_transition("scheduled", "ready_for_pickup", strict=False) is False
    with pytest.raises(InvalidStatusTransitionError):
        validate_transition("scheduled", "ready_for_pickup", strict=True)


def test_accepts_plain_strings():
    assert is_allowed("washing", "ready_for_pickup")
    assert not is_allowed("washing", "scheduled")
