from datetime import date, time

import pytest

from conftest import make_user
from hostel_laundry.core.exceptions import RepositoryError, ResourceNotFoundError, ValidationError
from hostel_laundry.models.base import UserRole, Weekday
from hostel_laundry.services.schedule.schedule_service import ScheduleService
from hostel_laundry.services.schedule.template_service import TemplateService


@pytest.fixture
def templates(any_store, config):
    return TemplateService(any_store, config=config)


@pytest.fixture
def actor(any_store):
    return make_user(any_store, "root@college.edu", role=UserRole.ADMIN)


@pytest.fixture
def twice_weekly(templates, actor):
    template = templates.create_template({"name": "Twice weekly"}, actor_id=actor.id)
    templates.add_template_schedule(template.id, {"scheduled_day": "thursday", "pickup_time": "18:00"})
    templates.add_template_schedule(
        template.id,
        {"scheduled_day": "monday", "pickup_time": "17:00", "dropoff_start_time": "08:00", "dropoff_end_time": "10:00"},
    )
    return template


def weekly_rows(store):
    return ScheduleService(store).list_schedules()


def test_templates_ordered_by_name(templates):
    for name in ("Weekend", "Alternate", "Midweek"):
        templates.create_template({"name": name})
    assert [t.name for t in templates.list_templates()] == ["Alternate", "Midweek", "Weekend"]


def test_template_slots_ordered_by_weekday(templates, twice_weekly):
    slots = templates.list_template_schedules(twice_weekly.id)
    assert [Weekday(slot.scheduled_day) for slot in slots] == [Weekday.MONDAY, Weekday.THURSDAY]
    assert slots[0].dropoff_start_time == time(8, 0)


def test_apply_creates_one_weekly_row_per_slot(templates, any_store, twice_weekly, actor):
    applied = templates.apply_template(twice_weekly.id, "C", 3, actor_id=actor.id)

    assert len(applied) == 2
    rows = weekly_rows(any_store)
    assert [(r.block, r.floor_number, Weekday(r.scheduled_day)) for r in rows] == [
        ("C", 3, Weekday.MONDAY),
        ("C", 3, Weekday.THURSDAY),
    ]
    assert all(r.created_by == actor.id for r in rows)


def test_reapplying_updates_instead_of_duplicating(templates, any_store, twice_weekly):
    templates.apply_template(twice_weekly.id, "C", 3)
    slot = templates.list_template_schedules(twice_weekly.id)[0]
    templates.update_template_schedule(slot.id, {"pickup_time": "16:45"})

    templates.apply_template(twice_weekly.id, "C", 3)

    rows = weekly_rows(any_store)
    assert len(rows) == 2
    assert rows[0].pickup_time == time(16, 45)


def test_slot_dropoff_window_can_be_cleared(templates, twice_weekly):
    monday = templates.list_template_schedules(twice_weekly.id)[0]
    updated = templates.update_template_schedule(monday.id, {"dropoff_start_time": None, "dropoff_end_time": None})

    assert updated.dropoff_start_time is None and updated.dropoff_end_time is None
    assert updated.pickup_time == time(17, 0)


def test_bulk_apply_covers_every_block_floor_pair(templates, any_store, twice_weekly):
    result = templates.bulk_apply_template(twice_weekly.id, ["A", "B"], [1, 2])

    assert result["targets"] == 4
    assert len(result["schedules"]) == 8
    pairs = {(r.block, r.floor_number) for r in weekly_rows(any_store)}
    assert pairs == {("A", 1), ("A", 2), ("B", 1), ("B", 2)}


def test_bulk_apply_is_all_or_nothing(templates, any_store, twice_weekly, monkeypatch):
    original_create = any_store.schedules.create
    calls = []

    def flaky_create(data, commit=True):
        calls.append(data)
        if len(calls) == 3:
            raise RepositoryError("Create failed", operation="create", table="laundry_schedules")
        return original_create(data, commit=commit)

    monkeypatch.setattr(any_store.schedules, "create", flaky_create)
    with pytest.raises(RepositoryError):
        templates.bulk_apply_template(twice_weekly.id, ["A", "B"], [1])

    monkeypatch.undo()
    assert weekly_rows(any_store) == []


def test_bulk_apply_requires_targets(templates, twice_weekly):
    with pytest.raises(ValidationError):
        templates.bulk_apply_template(twice_weekly.id, [], [1])


def test_empty_template_cannot_be_applied(templates):
    template = templates.create_template({"name": "Empty"})
    with pytest.raises(ValidationError):
        templates.apply_template(template.id, "A", 1)


def test_delete_template_removes_its_slots(templates, any_store, twice_weekly):
    templates.delete_template(twice_weekly.id)

    assert any_store.templates.count() == 0
    assert any_store.template_schedules.count() == 0
    with pytest.raises(ResourceNotFoundError):
        templates.get_template(twice_weekly.id)


class TestAppliedTemplateSchedules:
    """A block and floor served by both slots of the twice-weekly template."""

    @pytest.fixture
    def schedules(self, templates, any_store, twice_weekly, config):
        templates.apply_template(twice_weekly.id, "A", 1)
        return ScheduleService(any_store, config=config)

    @pytest.mark.parametrize(
        "on_date,pickup",
        [(date(2024, 6, 10), time(17, 0)), (date(2024, 6, 13), time(18, 0))],
    )
    def test_each_slot_has_a_pickup_on_its_day(self, schedules, on_date, pickup):
        effective = schedules.get_effective_schedule("A", 1, on_date)
        assert effective["has_pickup"] is True
        assert effective["source"] == "weekly"
        assert effective["schedule"]["pickup_time"] == pickup

    def test_no_pickup_between_slots(self, schedules):
        assert schedules.get_effective_schedule("A", 1, date(2024, 6, 11))["has_pickup"] is False

    @pytest.mark.parametrize(
        "today,expected",
        [
            (date(2024, 6, 10), date(2024, 6, 10)),
            (date(2024, 6, 11), date(2024, 6, 13)),
            (date(2024, 6, 14), date(2024, 6, 17)),
        ],
    )
    def test_next_pickup_is_the_earliest_slot(self, schedules, today, expected):
        assert schedules.next_pickup_date("A", 1, today) == expected

    def test_every_active_slot_is_listed(self, schedules):
        rows = schedules.get_schedules_for("A", 1)
        assert [Weekday(r.scheduled_day) for r in rows] == [Weekday.MONDAY, Weekday.THURSDAY]

    def test_inactive_slot_drops_out(self, schedules):
        monday = schedules.get_schedules_for("A", 1)[0]
        schedules.toggle_schedule_status(monday.id, False)

        assert schedules.get_effective_schedule("A", 1, date(2024, 6, 10))["has_pickup"] is False
        assert schedules.next_pickup_date("A", 1, date(2024, 6, 14)) == date(2024, 6, 20)
