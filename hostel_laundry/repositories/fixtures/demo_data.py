"""
Canned data for demo mode.

Seeds the three demo accounts, a handful of students with batches in every
status, the weekly schedules for blocks A and B, and today's date override.
Seeding is skipped when the admin account already exists.
"""

from datetime import time, timedelta
from typing import Dict

from hostel_laundry.core.logging import get_logger
from hostel_laundry.core.security import hash_password
from hostel_laundry.models.base import ActivityType, BatchStatus, NotificationChannel, UserRole, Weekday
from hostel_laundry.utils.datetime_utils import DateTimeHelper, utcnow

logger = get_logger(__name__)

DEMO_ADMIN_EMAIL = "admin@college.edu"
DEMO_STAFF_EMAIL = "staff@college.edu"
DEMO_STUDENT_EMAIL = "john.doe@student.college.edu"

DEMO_USERS = [
    {
        "email": DEMO_ADMIN_EMAIL,
        "password": "admin123",
        "full_name": "System Administrator",
        "role": UserRole.ADMIN,
    },
    {
        "email": DEMO_STAFF_EMAIL,
        "password": "staff123",
        "full_name": "Laundry Staff",
        "role": UserRole.STAFF,
    },
    {
        "email": DEMO_STUDENT_EMAIL,
        "password": "student123",
        "full_name": "John Doe",
        "role": UserRole.STUDENT,
        "block": "A",
        "floor_number": 1,
        "room_number": "101",
        "phone": "+1234567890",
    },
    {
        "email": "jane.smith@student.college.edu",
        "password": "student123",
        "full_name": "Jane Smith",
        "role": UserRole.STUDENT,
        "block": "A",
        "floor_number": 2,
        "room_number": "205",
    },
    {
        "email": "mike.johnson@student.college.edu",
        "password": "student123",
        "full_name": "Mike Johnson",
        "role": UserRole.STUDENT,
        "block": "B",
        "floor_number": 1,
        "room_number": "101",
    },
    {
        "email": "sarah.wilson@student.college.edu",
        "password": "student123",
        "full_name": "Sarah Wilson",
        "role": UserRole.STUDENT,
        "block": "B",
        "floor_number": 2,
        "room_number": "204",
        "email_notifications": False,
    },
]

DEMO_WEEKLY_SCHEDULES = [
    ("A", 1, Weekday.MONDAY),
    ("A", 2, Weekday.TUESDAY),
    ("B", 1, Weekday.WEDNESDAY),
    ("B", 2, Weekday.THURSDAY),
]


def seed_demo_data(store) -> bool:
    """Load the demo dataset into ``store``; returns False if it was already there"""
    if store.users.find_one({"email": DEMO_ADMIN_EMAIL}) is not None:
        logger.debug("Demo data already present")
        return False

    now = utcnow()
    today = DateTimeHelper.today()
    hashes: Dict[str, str] = {}

    with store.transaction():
        users = {}
        for entry in DEMO_USERS:
            data = dict(entry)
            password = data.pop("password")
            if password not in hashes:
                hashes[password] = hash_password(password)
            data["password_hash"] = hashes[password]
            users[data["email"]] = store.users.create(data, commit=False)

        admin = users[DEMO_ADMIN_EMAIL]
        staff = users[DEMO_STAFF_EMAIL]
        john = users[DEMO_STUDENT_EMAIL]
        jane = users["jane.smith@student.college.edu"]
        mike = users["mike.johnson@student.college.edu"]
        sarah = users["sarah.wilson@student.college.edu"]

        for block, floor, day in DEMO_WEEKLY_SCHEDULES:
            store.schedules.create(
                {
                    "block": block,
                    "floor_number": floor,
                    "scheduled_day": day,
                    "pickup_time": time(18, 0),
                    "dropoff_start_time": time(8, 0),
                    "dropoff_end_time": time(10, 0),
                    "created_by": admin.id,
                },
                commit=False,
            )

        store.date_schedules.create(
            {
                "block": "A",
                "floor_number": 2,
                "schedule_date": today,
                "pickup_time": time(18, 0),
                "dropoff_start_time": time(8, 0),
                "dropoff_end_time": time(10, 0),
                "notes": "Extra collection this week",
                "created_by": admin.id,
            },
            commit=False,
        )

        batches = [
            {
                "student_id": john.id,
                "batch_number": "LB001234567",
                "status": BatchStatus.READY_FOR_PICKUP,
                "scheduled_date": today - timedelta(days=1),
                "dropped_off_at": now - timedelta(days=3),
                "ready_at": now - timedelta(hours=2),
                "staff_notes": "All items clean and pressed. Ready for pickup.",
            },
            {
                "student_id": jane.id,
                "batch_number": "LB001234568",
                "status": BatchStatus.WASHING,
                "scheduled_date": today,
                "dropped_off_at": now - timedelta(hours=2),
                "staff_notes": "Currently in washing cycle. Expected completion in 30 minutes.",
            },
            {
                "student_id": mike.id,
                "batch_number": "LB001234569",
                "status": BatchStatus.DROPPED_OFF,
                "scheduled_date": today,
                "dropped_off_at": now - timedelta(minutes=30),
                "staff_notes": "Received 30 minutes ago. Waiting to start washing.",
            },
            {
                "student_id": sarah.id,
                "batch_number": "LB001234570",
                "status": BatchStatus.PICKED_UP,
                "scheduled_date": today - timedelta(days=2),
                "dropped_off_at": now - timedelta(days=5),
                "ready_at": now - timedelta(days=4),
                "picked_up_at": now - timedelta(days=3),
                "staff_notes": "Completed successfully. Student picked up on time.",
            },
            {
                "student_id": john.id,
                "batch_number": "LB001234571",
                "status": BatchStatus.PICKED_UP,
                "scheduled_date": today - timedelta(days=7),
                "dropped_off_at": now - timedelta(days=7),
                "ready_at": now - timedelta(days=6),
                "picked_up_at": now - timedelta(days=5),
                "staff_notes": "Completed successfully",
            },
            {
                "student_id": jane.id,
                "batch_number": "LB001234572",
                "status": BatchStatus.SCHEDULED,
                "scheduled_date": today + timedelta(days=1),
                "staff_notes": "Scheduled for tomorrow's pickup.",
            },
        ]
        created = store.batches.create_many(batches, commit=False)
        ready_batch = created[0]

        store.notifications.create(
            {
                "user_id": john.id,
                "batch_id": ready_batch.id,
                "type": NotificationChannel.EMAIL,
                "message": f"Your laundry batch {ready_batch.batch_number} is ready for pickup!",
                "sent_at": now - timedelta(hours=2),
                "delivered": True,
                "delivered_at": now - timedelta(hours=2),
            },
            commit=False,
        )
        store.notifications.create(
            {
                "user_id": john.id,
                "batch_id": created[4].id,
                "type": NotificationChannel.EMAIL,
                "message": f"Your laundry batch {created[4].batch_number} is ready for pickup!",
                "sent_at": now - timedelta(days=6),
                "delivered": True,
                "delivered_at": now - timedelta(days=6),
                "is_read": True,
                "read_at": now - timedelta(days=6),
            },
            commit=False,
        )

        store.activity_logs.create(
            {
                "user_id": staff.id,
                "activity_type": ActivityType.STATUS_CHANGE,
                "description": f"Updated batch {ready_batch.batch_number} status to ready_for_pickup",
                "activity_metadata": {"batchId": ready_batch.id, "status": "ready_for_pickup"},
                "created_at": now - timedelta(hours=2),
            },
            commit=False,
        )
        store.activity_logs.create(
            {
                "user_id": john.id,
                "activity_type": ActivityType.LOGIN,
                "description": "User logged in",
                "created_at": now - timedelta(hours=1),
            },
            commit=False,
        )

    logger.info(f"Seeded demo data: {len(DEMO_USERS)} users, {len(batches)} batches")
    return True
