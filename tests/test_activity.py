import pytest
from structlog.testing import capture_logs

from conftest import make_user
from hostel_laundry.config.logging import RequestContextProcessor
from hostel_laundry.config.settings import Settings
from hostel_laundry.core import logging as log_context
from hostel_laundry.models.base import ActivityType, UserRole
from hostel_laundry.services.activity.activity_service import ActivityService


@pytest.fixture
def actor(store):
    return make_user(store, "root@college.edu", role=UserRole.ADMIN)


def test_recent_entries_carry_the_actor(store, config, actor):
    service = ActivityService(store, config)
    service.log_activity(actor.id, ActivityType.LOGIN, "User logged in", {"role": "admin"})

    [entry] = service.list_recent()
    assert entry["user"]["email"] == "root@college.edu"
    assert entry["metadata"] == {"role": "admin"}


def test_structured_audit_event(store, actor):
    service = ActivityService(store, Settings(ENABLE_STRUCTURED_LOGGING=True))
    with capture_logs() as events:
        entry = service.log_activity(actor.id, ActivityType.SCHEDULE_UPDATE, "Created schedule for Block A Floor 1")

    [event] = [e for e in events if e["event"] == "activity_recorded"]
    assert event["log_id"] == entry.id
    assert event["actor_id"] == actor.id
    assert event["activity_type"] == "schedule_update"
    assert event["log_level"] == "info"


def test_no_structured_event_when_disabled(store, config, actor):
    service = ActivityService(store, config)
    with capture_logs() as events:
        service.log_activity(actor.id, ActivityType.LOGIN, "User logged in")
    assert events == []


def test_request_context_is_added_to_events():
    token = log_context.request_id.set("req-42")
    try:
        event = RequestContextProcessor()(None, "info", {"event": "activity_recorded"})
    finally:
        log_context.request_id.reset(token)

    assert event["request_id"] == "req-42"
