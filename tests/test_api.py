from datetime import date, timedelta

from conftest import login
from hostel_laundry.core.security import create_access_token
from hostel_laundry.utils.datetime_utils import DateTimeHelper

API = "/api/v1"


def find_batch(client, headers, batch_number):
    response = client.get(f"{API}/batches", params={"search": batch_number}, headers=headers)
    assert response.status_code == 200
    (batch,) = response.json()
    return batch


def test_health(client):
    body = client.get(f"{API}/health").json()
    assert body["status"] == "ok"
    assert body["storage"] == "demo"


def test_response_headers(client):
    response = client.get(f"{API}/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert "X-Process-Time" in response.headers
    assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestAuth:
    def test_login_and_me(self, client, student_headers):
        me = client.get(f"{API}/auth/me", headers=student_headers).json()
        assert me["email"] == "john.doe@student.college.edu"
        assert me["role"] == "student"

    def test_bad_password(self, client):
        response = client.post(f"{API}/auth/login", json={"email": "admin@college.edu", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid credentials"

    def test_missing_token(self, client):
        response = client.get(f"{API}/auth/me")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"

    def test_garbage_token(self, client):
        response = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "TOKEN_INVALID"

    def test_signup_then_login(self, client):
        response = client.post(
            f"{API}/auth/signup",
            json={
                "email": "new.kid@student.college.edu",
                "password": "secret123",
                "full_name": "New Kid",
                "block": "B",
                "floor_number": 1,
                "room_number": "110",
            },
        )
        assert response.status_code == 201
        assert response.json()["role"] == "student"
        login(client, "new.kid@student.college.edu", "secret123")

    def test_signup_duplicate(self, client):
        response = client.post(
            f"{API}/auth/signup",
            json={
                "email": "staff@college.edu",
                "password": "secret123",
                "full_name": "Copy",
                "block": "A",
                "floor_number": 1,
                "room_number": "102",
            },
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_ENTRY"

    def test_signup_cannot_grant_admin(self, client):
        response = client.post(
            f"{API}/auth/signup",
            json={
                "email": "sneaky@student.college.edu",
                "password": "secret123",
                "full_name": "Sneaky",
                "role": "admin",
                "block": "A",
                "floor_number": 1,
                "room_number": "103",
            },
        )
        assert response.status_code == 201
        assert response.json()["role"] == "student"

        headers = login(client, "sneaky@student.college.edu", "secret123")
        assert client.get(f"{API}/activity-logs", headers=headers).status_code == 403

    def test_admin_creates_staff_account(self, client, admin_headers):
        payload = {"email": "porter@college.edu", "password": "secret123", "full_name": "Porter", "role": "staff"}
        response = client.post(f"{API}/users", json=payload, headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["role"] == "staff"

        headers = login(client, "porter@college.edu", "secret123")
        assert client.get(f"{API}/batches", headers=headers).status_code == 200

    def test_only_admins_create_accounts(self, client, staff_headers):
        payload = {"email": "boss@college.edu", "password": "secret123", "full_name": "Boss", "role": "admin"}
        assert client.post(f"{API}/users", json=payload, headers=staff_headers).status_code == 403
        assert client.post(f"{API}/users", json=payload).status_code == 401

    def test_signup_validation(self, client):
        response = client.post(
            f"{API}/auth/signup",
            json={"email": "not-an-email", "password": "123", "full_name": "X"},
        )
        assert response.status_code == 422
        body = response.json()["error"]
        assert body["code"] == "VALIDATION_ERROR"
        assert "email" in body["details"]["field_errors"]

    def test_role_is_read_from_store_not_token(self, client, student_headers):
        me = client.get(f"{API}/auth/me", headers=student_headers).json()
        forged = create_access_token({"sub": me["id"], "role": "admin"})
        response = client.get(f"{API}/schedules", headers={"Authorization": f"Bearer {forged}"})
        assert response.status_code == 403


class TestBatches:
    def test_student_cannot_list_all(self, client, student_headers):
        response = client.get(f"{API}/batches", headers=student_headers)
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "AUTHORIZATION_FAILED"

    def test_staff_lists_and_filters(self, client, staff_headers):
        everything = client.get(f"{API}/batches", headers=staff_headers).json()
        assert len(everything) == 6
        block_b = client.get(f"{API}/batches", params={"block": "B"}, headers=staff_headers).json()
        assert {b["student"]["block"] for b in block_b} == {"B"}
        ready = client.get(f"{API}/batches", params={"status": "ready_for_pickup"}, headers=staff_headers).json()
        assert [b["batch_number"] for b in ready] == ["LB001234567"]

    def test_student_sees_only_own_batches(self, client, student_headers, staff_headers):
        mine = client.get(f"{API}/batches/mine", headers=student_headers).json()
        assert {b["batch_number"] for b in mine} == {"LB001234567", "LB001234571"}

        active = client.get(f"{API}/batches/mine/active", headers=student_headers).json()
        assert active["batch_number"] == "LB001234567"

        other = find_batch(client, staff_headers, "LB001234568")
        assert client.get(f"{API}/batches/{other['id']}", headers=student_headers).status_code == 404

    def test_student_creates_for_self(self, client, student_headers):
        response = client.post(
            f"{API}/batches",
            json={"scheduled_date": (DateTimeHelper.today() + timedelta(days=2)).isoformat()},
            headers=student_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "scheduled"
        assert body["batch_number"].startswith("LB")
        assert body["student"]["email"] == "john.doe@student.college.edu"

    def test_staff_must_name_student(self, client, staff_headers):
        response = client.post(f"{API}/batches", json={"scheduled_date": DateTimeHelper.today().isoformat()}, headers=staff_headers)
        assert response.status_code == 422

    def test_ready_for_pickup_emails_student(self, client, staff_headers, email_sender):
        batch = find_batch(client, staff_headers, "LB001234568")
        response = client.patch(
            f"{API}/batches/{batch['id']}/status",
            json={"status": "ready_for_pickup", "notes": "Folded"},
            headers=staff_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready_for_pickup"
        assert body["ready_at"] is not None
        assert body["staff_notes"] == "Folded"

        assert [mail["to"] for mail in email_sender.sent] == ["jane.smith@student.college.edu"]
        jane = login(client, "jane.smith@student.college.edu", "student123")
        assert client.get(f"{API}/notifications/unread-count", headers=jane).json()["count"] == 1

    def test_student_cannot_change_status(self, client, student_headers, staff_headers):
        batch = find_batch(client, staff_headers, "LB001234567")
        response = client.patch(
            f"{API}/batches/{batch['id']}/status", json={"status": "picked_up"}, headers=student_headers
        )
        assert response.status_code == 403

    def test_unknown_status_value(self, client, staff_headers):
        batch = find_batch(client, staff_headers, "LB001234567")
        response = client.patch(f"{API}/batches/{batch['id']}/status", json={"status": "lost"}, headers=staff_headers)
        assert response.status_code == 422

    def test_stats(self, client, staff_headers):
        stats = client.get(f"{API}/batches/stats", headers=staff_headers).json()
        assert stats["total"] == 6
        assert stats["by_status"]["picked_up"] == 2
        assert stats["active"] == 4


class TestNotifications:
    def test_inbox_and_mark_read(self, client, student_headers):
        inbox = client.get(f"{API}/notifications", headers=student_headers).json()
        assert len(inbox) == 2
        assert client.get(f"{API}/notifications/unread-count", headers=student_headers).json()["count"] == 1

        unread = next(n for n in inbox if not n["is_read"])
        response = client.post(f"{API}/notifications/{unread['id']}/read", headers=student_headers)
        assert response.status_code == 200
        assert response.json()["is_read"] is True
        assert client.get(f"{API}/notifications/unread-count", headers=student_headers).json()["count"] == 0

    def test_cannot_read_someone_elses(self, client, student_headers):
        jane = login(client, "jane.smith@student.college.edu", "student123")
        inbox = client.get(f"{API}/notifications", headers=student_headers).json()
        assert client.post(f"{API}/notifications/{inbox[0]['id']}/read", headers=jane).status_code == 404

    def test_bulk_is_admin_only(self, client, staff_headers):
        response = client.post(f"{API}/notifications/bulk", json={"user_ids": [], "message": "hi"}, headers=staff_headers)
        assert response.status_code == 403


class TestSchedules:
    def test_admin_crud(self, client, admin_headers):
        created = client.post(
            f"{API}/schedules",
            json={
                "block": "C",
                "floor_number": 3,
                "scheduled_day": "friday",
                "pickup_time": "17:30",
                "dropoff_start_time": "07:00",
                "dropoff_end_time": "09:00",
            },
            headers=admin_headers,
        )
        assert created.status_code == 201
        schedule = created.json()
        assert schedule["pickup_time"] == "17:30:00"
        assert schedule["max_batches_per_day"] >= 1

        updated = client.patch(
            f"{API}/schedules/{schedule['id']}", json={"pickup_time": "19:00"}, headers=admin_headers
        ).json()
        assert updated["pickup_time"] == "19:00:00"

        toggled = client.post(
            f"{API}/schedules/{schedule['id']}/toggle", json={"is_active": False}, headers=admin_headers
        ).json()
        assert toggled["is_active"] is False

        block_c = client.get(f"{API}/schedules/block/C", headers=admin_headers).json()
        assert [s["id"] for s in block_c] == [schedule["id"]]

        assert client.delete(f"{API}/schedules/{schedule['id']}", headers=admin_headers).status_code == 200
        assert client.patch(
            f"{API}/schedules/{schedule['id']}", json={"pickup_time": "19:00"}, headers=admin_headers
        ).status_code == 404

    def test_dropoff_window_must_be_ordered(self, client, admin_headers):
        response = client.post(
            f"{API}/schedules",
            json={
                "block": "C",
                "floor_number": 3,
                "scheduled_day": "friday",
                "pickup_time": "17:30",
                "dropoff_start_time": "10:00",
                "dropoff_end_time": "09:00",
            },
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_patch_null_clears_dropoff_window(self, client, admin_headers):
        schedules = client.get(f"{API}/schedules/block/A", headers=admin_headers).json()
        target = next(s for s in schedules if s["floor_number"] == 1)
        assert target["dropoff_start_time"] is not None

        response = client.patch(
            f"{API}/schedules/{target['id']}",
            json={"dropoff_start_time": None, "dropoff_end_time": None},
            headers=admin_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["dropoff_start_time"] is None
        assert body["dropoff_end_time"] is None
        assert body["pickup_time"] == target["pickup_time"]

    def test_staff_cannot_manage_schedules(self, client, staff_headers):
        assert client.get(f"{API}/schedules", headers=staff_headers).status_code == 403

    def test_student_schedule(self, client, student_headers):
        body = client.get(f"{API}/schedules/mine", headers=student_headers).json()
        assert [s["scheduled_day"] for s in body["schedules"]] == ["monday"]
        assert date.fromisoformat(body["next_pickup_date"]).weekday() == 0

    def test_student_schedule_lists_every_slot(self, client, admin_headers, student_headers):
        created = client.post(
            f"{API}/schedules",
            json={"block": "A", "floor_number": 1, "scheduled_day": "thursday", "pickup_time": "18:00"},
            headers=admin_headers,
        )
        assert created.status_code == 201

        body = client.get(f"{API}/schedules/mine", headers=student_headers).json()
        assert [s["scheduled_day"] for s in body["schedules"]] == ["monday", "thursday"]
        next_day = date.fromisoformat(body["next_pickup_date"])
        assert next_day.weekday() in (0, 3)
        assert (next_day - DateTimeHelper.today()).days < 4

    def test_effective_schedule_prefers_date_override(self, client, student_headers):
        today = DateTimeHelper.today().isoformat()
        body = client.get(
            f"{API}/schedules/effective", params={"block": "A", "floor": 2, "on": today}, headers=student_headers
        ).json()
        assert body["source"] == "date"
        assert body["has_pickup"] is True

    def test_all_schedules_visible_to_students(self, client, student_headers):
        entries = client.get(f"{API}/schedules/all", headers=student_headers).json()
        assert len(entries) >= 5


class TestDateSchedules:
    def payload(self, **overrides):
        data = {
            "block": "B",
            "floor_number": 1,
            "schedule_date": (DateTimeHelper.today() + timedelta(days=10)).isoformat(),
            "pickup_time": "12:00",
            "is_holiday": True,
            "holiday_name": "Founders Day",
        }
        data.update(overrides)
        return data

    def test_duplicate_slot_conflict(self, client, admin_headers):
        assert client.post(f"{API}/date-schedules", json=self.payload(), headers=admin_headers).status_code == 201

        response = client.post(f"{API}/date-schedules", json=self.payload(), headers=admin_headers)
        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "DUPLICATE_ENTRY"
        assert error["message"] == "A schedule for this block, floor and date already exists"
        assert error["request_id"]

    def test_toggle_without_body_flips(self, client, admin_headers):
        created = client.post(f"{API}/date-schedules", json=self.payload(), headers=admin_headers).json()
        toggled = client.post(f"{API}/date-schedules/{created['id']}/toggle", headers=admin_headers).json()
        assert toggled["is_active"] is False

    def test_upcoming(self, client, student_headers):
        upcoming = client.get(f"{API}/date-schedules/upcoming", headers=student_headers).json()
        assert [row["schedule_date"] for row in upcoming] == [DateTimeHelper.today().isoformat()]


class TestTemplates:
    def test_create_fill_and_bulk_apply(self, client, admin_headers):
        template = client.post(f"{API}/templates", json={"name": "Midweek"}, headers=admin_headers).json()
        slot = client.post(
            f"{API}/templates/{template['id']}/schedules",
            json={"scheduled_day": "wednesday", "pickup_time": "16:00"},
            headers=admin_headers,
        )
        assert slot.status_code == 201

        response = client.post(
            f"{API}/templates/bulk-apply",
            json={"template_id": template["id"], "blocks": ["C", "D"], "floors": [1, 2]},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["targets"] == 4

        block_d = client.get(f"{API}/schedules/block/D", headers=admin_headers).json()
        assert {(s["floor_number"], s["scheduled_day"]) for s in block_d} == {(1, "wednesday"), (2, "wednesday")}

    def test_applying_empty_template(self, client, admin_headers):
        template = client.post(f"{API}/templates", json={"name": "Empty"}, headers=admin_headers).json()
        response = client.post(
            f"{API}/templates/{template['id']}/apply", json={"block": "C", "floor_number": 1}, headers=admin_headers
        )
        assert response.status_code == 422


def test_activity_log_is_admin_only(client, admin_headers, student_headers):
    assert client.get(f"{API}/activity-logs", headers=student_headers).status_code == 403
    logs = client.get(f"{API}/activity-logs", headers=admin_headers).json()
    assert any(entry["activity_type"] == "login" for entry in logs)
