from datetime import date, time

import pytest

from conftest import make_user
from hostel_laundry.core.exceptions import EntityAlreadyExistsError, ResourceNotFoundError, ValidationError
from hostel_laundry.models import LaundrySchedule
from hostel_laundry.models.base import ActivityType, BatchStatus, Weekday
from hostel_laundry.services.schedule.date_schedule_service import DateScheduleService
from hostel_laundry.services.schedule.schedule_service import ScheduleService, normalize_schedule_times

MONDAY = date(2024, 6, 10)


@pytest.fixture
def schedules(store, config):
    return ScheduleService(store, config=config)


@pytest.fixture
def date_schedules(store, config):
    return DateScheduleService(store, config=config)


def test_time_strings_are_normalized():
    data = normalize_schedule_times({"pickup_time": "18:00", "dropoff_start_time": "08:15:30"})
    assert data["pickup_time"] == time(18, 0, 0)
    assert data["dropoff_start_time"] == time(8, 15, 30)


def test_bad_time_is_a_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        normalize_schedule_times({"pickup_time": "6pm"})
    assert "pickup_time" in exc_info.value.details["field_errors"]


class TestWeeklySchedules:
    def test_create_applies_defaults_and_logs(self, schedules, store, admin, weekly_slot):
        schedule = schedules.create_schedule(weekly_slot, actor_id=admin.id)

        assert schedule.pickup_time == time(18, 0)
        assert schedule.is_active is True
        assert schedule.max_batches_per_day == 50
        assert schedule.created_by == admin.id
        log = store.activity_logs.find_one({"activity_type": ActivityType.SCHEDULE_UPDATE})
        assert log.description == "Created schedule for Block A Floor 1"

    def test_update_logs_block_and_floor(self, schedules, store, admin, weekly_slot):
        schedule = schedules.create_schedule(weekly_slot)
        updated = schedules.update_schedule(schedule.id, {"pickup_time": "19:30"}, actor_id=admin.id)

        assert updated.pickup_time == time(19, 30)
        assert updated.updated_by == admin.id
        log = store.activity_logs.find_one({"user_id": admin.id})
        assert log.description == "Updated schedule for Block A Floor 1"

    def test_null_clears_dropoff_window_but_not_required_columns(self, schedules, weekly_slot):
        schedule = schedules.create_schedule(weekly_slot)
        updated = schedules.update_schedule(
            schedule.id, {"dropoff_start_time": None, "dropoff_end_time": None, "pickup_time": None}
        )

        assert updated.dropoff_start_time is None
        assert updated.dropoff_end_time is None
        assert updated.pickup_time == time(18, 0)

    def test_listing_orders_by_block_floor_and_weekday(self, schedules, weekly_slot):
        for block, floor, day in (("B", 1, "monday"), ("A", 2, "tuesday"), ("A", 1, "friday"), ("A", 1, "monday")):
            schedules.create_schedule(dict(weekly_slot, block=block, floor_number=floor, scheduled_day=day))

        listed = [(s.block, s.floor_number, Weekday(s.scheduled_day).value) for s in schedules.list_schedules()]
        assert listed == [("A", 1, "monday"), ("A", 1, "friday"), ("A", 2, "tuesday"), ("B", 1, "monday")]
        assert [s.block for s in schedules.list_schedules_by_block("B")] == ["B"]

    def test_toggle_missing_schedule_is_not_found(self, schedules):
        with pytest.raises(ResourceNotFoundError):
            schedules.toggle_schedule_status("missing", False)

    def test_inactive_schedule_is_not_served(self, schedules, weekly_slot):
        schedule = schedules.create_schedule(weekly_slot)
        schedules.toggle_schedule_status(schedule.id, False)
        with pytest.raises(ResourceNotFoundError):
            schedules.get_schedules_for("A", 1)
        assert schedules.next_pickup_date("A", 1, MONDAY) is None

    def test_delete(self, schedules, weekly_slot):
        schedule = schedules.create_schedule(weekly_slot)
        schedules.delete_schedule(schedule.id)
        assert schedules.list_schedules() == []
        with pytest.raises(ResourceNotFoundError):
            schedules.delete_schedule(schedule.id)

    @pytest.mark.parametrize(
        "today,expected",
        [
            (date(2024, 6, 10), date(2024, 6, 10)),
            (date(2024, 6, 11), date(2024, 6, 17)),
            (date(2024, 6, 16), date(2024, 6, 17)),
        ],
    )
    def test_next_pickup_includes_today(self, schedules, weekly_slot, today, expected):
        schedules.create_schedule(weekly_slot)
        assert schedules.next_pickup_date("A", 1, today) == expected


class TestCombinedViews:
    @pytest.fixture
    def setup(self, schedules, date_schedules, weekly_slot):
        schedules.create_schedule(weekly_slot)
        date_schedules.create_date_schedule(
            {"block": "A", "floor_number": 1, "schedule_date": date(2024, 6, 1), "pickup_time": "18:00"}
        )
        date_schedules.create_date_schedule(
            {
                "block": "A",
                "floor_number": 1,
                "schedule_date": date(2024, 6, 17),
                "pickup_time": "18:00",
                "is_holiday": True,
                "holiday_name": "Founders Day",
            }
        )
        date_schedules.create_date_schedule(
            {"block": "A", "floor_number": 1, "schedule_date": date(2024, 6, 12), "pickup_time": "12:00"}
        )

    def test_all_schedules_lists_weekly_then_upcoming_dates(self, schedules, setup):
        rows = schedules.get_all_schedules(today=MONDAY)
        assert [row["is_date_specific"] for row in rows] == [False, True, True]
        assert [row["schedule_date"] for row in rows[1:]] == [date(2024, 6, 12), date(2024, 6, 17)]
        assert rows[1]["scheduled_day"] == Weekday.WEDNESDAY

    def test_weekly_schedule_applies_on_its_day(self, schedules, setup):
        effective = schedules.get_effective_schedule("A", 1, MONDAY)
        assert effective["has_pickup"] is True
        assert effective["source"] == "weekly"

    def test_no_pickup_on_other_days(self, schedules, setup):
        effective = schedules.get_effective_schedule("A", 1, date(2024, 6, 11))
        assert effective["has_pickup"] is False
        assert effective["source"] is None

    def test_date_override_adds_a_pickup(self, schedules, setup):
        effective = schedules.get_effective_schedule("A", 1, date(2024, 6, 12))
        assert effective["source"] == "date"
        assert effective["has_pickup"] is True
        assert effective["schedule"]["pickup_time"] == time(12, 0)

    def test_holiday_cancels_the_weekly_pickup(self, schedules, setup):
        effective = schedules.get_effective_schedule("A", 1, date(2024, 6, 17))
        assert effective["has_pickup"] is False
        assert effective["is_holiday"] is True
        assert effective["holiday_name"] == "Founders Day"

    def test_inactive_override_is_ignored(self, schedules, date_schedules, setup):
        holiday = date_schedules.list_upcoming(MONDAY)[-1]
        date_schedules.toggle_status(holiday.id)
        effective = schedules.get_effective_schedule("A", 1, date(2024, 6, 17))
        assert effective["source"] == "weekly"
        assert effective["has_pickup"] is True

    def test_overview_counts_residents_and_open_batches(self, schedules, store, weekly_slot):
        schedules.create_schedule(weekly_slot)
        resident = make_user(store, "res@student.college.edu")
        make_user(store, "away@student.college.edu", block="B")
        for number, status in (("LB1", BatchStatus.WASHING), ("LB2", BatchStatus.PICKED_UP)):
            store.batches.create(
                {"student_id": resident.id, "batch_number": number, "status": status, "scheduled_date": MONDAY}
            )

        [row] = schedules.get_schedule_overview()
        assert row["student_count"] == 1
        assert row["active_batch_count"] == 1


class TestDateSchedules:
    @pytest.fixture
    def slot(self):
        return {"block": "A", "floor_number": 2, "schedule_date": date(2024, 6, 12), "pickup_time": "18:00"}

    def test_duplicate_slot_is_rejected(self, date_schedules, slot):
        date_schedules.create_date_schedule(slot)
        with pytest.raises(EntityAlreadyExistsError) as exc_info:
            date_schedules.create_date_schedule(slot)
        assert exc_info.value.message == "A schedule for this block, floor and date already exists"
        assert exc_info.value.status_code == 409

    def test_update_into_taken_slot_is_rejected(self, date_schedules, slot):
        date_schedules.create_date_schedule(slot)
        other = date_schedules.create_date_schedule(dict(slot, schedule_date=date(2024, 6, 13)))
        with pytest.raises(EntityAlreadyExistsError):
            date_schedules.update_date_schedule(other.id, {"schedule_date": date(2024, 6, 12)})

    def test_null_clears_holiday_name_and_notes(self, date_schedules, slot):
        schedule = date_schedules.create_date_schedule(
            dict(slot, is_holiday=True, holiday_name="Founders Day", notes="Gate closed", dropoff_start_time="08:00")
        )
        updated = date_schedules.update_date_schedule(
            schedule.id, {"is_holiday": False, "holiday_name": None, "notes": None, "dropoff_start_time": None}
        )

        assert updated.is_holiday is False
        assert updated.holiday_name is None
        assert updated.notes is None
        assert updated.dropoff_start_time is None
        assert updated.schedule_date == date(2024, 6, 12)

    def test_toggle_flips_or_sets(self, date_schedules, slot):
        schedule = date_schedules.create_date_schedule(slot)
        assert date_schedules.toggle_status(schedule.id).is_active is False
        assert date_schedules.toggle_status(schedule.id).is_active is True
        assert date_schedules.toggle_status(schedule.id, is_active=True).is_active is True

    def test_listing_orders(self, date_schedules, slot):
        date_schedules.create_date_schedule(dict(slot, schedule_date=date(2024, 6, 1)))
        date_schedules.create_date_schedule(dict(slot, block="B"))
        date_schedules.create_date_schedule(slot)

        listed = [(s.schedule_date, s.block) for s in date_schedules.list_date_schedules()]
        assert listed == [(date(2024, 6, 12), "A"), (date(2024, 6, 12), "B"), (date(2024, 6, 1), "A")]
        assert [s.schedule_date for s in date_schedules.list_upcoming(MONDAY)] == [date(2024, 6, 12)] * 2

    def test_delete_missing_is_not_found(self, date_schedules):
        with pytest.raises(ResourceNotFoundError):
            date_schedules.delete_date_schedule("missing")


def test_duplicate_date_slot_on_sqlalchemy(sql_store, config):
    service = DateScheduleService(sql_store, config=config)
    slot = {"block": "A", "floor_number": 2, "schedule_date": date(2024, 6, 12), "pickup_time": "18:00"}
    service.create_date_schedule(slot)
    with pytest.raises(EntityAlreadyExistsError):
        service.create_date_schedule(slot)
    assert len(service.list_date_schedules()) == 1


def test_toggle_off_and_on_restores_the_record(any_store, config, weekly_slot):
    service = ScheduleService(any_store, config=config)
    schedule = service.create_schedule(weekly_slot)
    columns = [c.name for c in LaundrySchedule.__table__.columns if c.name not in ("updated_at", "updated_by")]
    before = {name: getattr(schedule, name) for name in columns}

    assert service.toggle_schedule_status(schedule.id, False).is_active is False
    restored = service.toggle_schedule_status(schedule.id, True)

    assert {name: getattr(restored, name) for name in columns} == before
    assert restored.updated_at is not None
