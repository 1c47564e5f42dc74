import os

# Settings are read once at import time; pin them before anything imports the package
os.environ["DEMO_MODE"] = "true"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PASSWORD_BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-the-laundry-suite"
os.environ.pop("DATABASE_URL", None)
os.environ.pop("SMTP_HOST", None)

from typing import List, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from hostel_laundry.config.settings import Settings  # noqa: E402
from hostel_laundry.core.security import hash_password  # noqa: E402
from hostel_laundry.db.session import create_db_engine, create_session_factory  # noqa: E402
from hostel_laundry.models import Base  # noqa: E402
from hostel_laundry.models.base import UserRole  # noqa: E402
from hostel_laundry.repositories.data_store import FixtureDataStore, SQLAlchemyDataStore  # noqa: E402
from hostel_laundry.repositories.store_factory import FixtureStoreProvider  # noqa: E402
from hostel_laundry.services.activity.activity_service import ActivityService  # noqa: E402
from hostel_laundry.services.laundry.batch_service import BatchService  # noqa: E402
from hostel_laundry.services.notification.email_service import EmailSender, EmailService  # noqa: E402
from hostel_laundry.services.notification.notification_dispatcher import NotificationDispatcher  # noqa: E402
from hostel_laundry.services.notification.notification_service import NotificationService  # noqa: E402


class RecordingEmailSender(EmailSender):
    """Captures outgoing mail; ``result`` controls what send() reports"""

    def __init__(self, result: bool = True):
        self.result = result
        self.sent: List[dict] = []

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})
        return self.result


@pytest.fixture
def config() -> Settings:
    return Settings()


@pytest.fixture
def strict_config() -> Settings:
    return Settings(STRICT_STATUS_TRANSITIONS=True)


@pytest.fixture
def memory_store():
    return FixtureDataStore()


@pytest.fixture
def sql_store():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = create_session_factory(engine)()
    store = SQLAlchemyDataStore(session)
    yield store
    store.close()
    engine.dispose()


@pytest.fixture(params=["memory", "sqlalchemy"])
def any_store(request):
    """Runs a test once against each store implementation"""
    return request.getfixturevalue("memory_store" if request.param == "memory" else "sql_store")


@pytest.fixture
def store(memory_store):
    return memory_store


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


def build_services(store, sender, config):
    activity = ActivityService(store, config)
    dispatcher = NotificationDispatcher(store, EmailService(sender, config), activity, config)
    return {
        "activity": activity,
        "dispatcher": dispatcher,
        "batches": BatchService(store, dispatcher, activity, config),
        "notifications": NotificationService(store, dispatcher, activity, config),
    }


@pytest.fixture
def services(store, email_sender, config):
    return build_services(store, email_sender, config)


def make_user(store, email: str, role: UserRole = UserRole.STUDENT, password: str = "secret123", **extra):
    data = {
        "email": email,
        "full_name": extra.pop("full_name", email.split("@")[0].replace(".", " ").title()),
        "role": role,
        "password_hash": hash_password(password),
    }
    if role == UserRole.STUDENT:
        data.update(block="A", floor_number=1, room_number="101")
    data.update(extra)
    return store.users.create(data)


@pytest.fixture
def student(store):
    return make_user(store, "alice@student.college.edu", full_name="Alice Student")


@pytest.fixture
def staff(store):
    return make_user(store, "bob@college.edu", role=UserRole.STAFF, full_name="Bob Staff")


@pytest.fixture
def admin(store):
    return make_user(store, "carol@college.edu", role=UserRole.ADMIN, full_name="Carol Admin")


@pytest.fixture
def weekly_slot():
    return {
        "block": "A",
        "floor_number": 1,
        "scheduled_day": "monday",
        "pickup_time": "18:00",
        "dropoff_start_time": "08:00",
        "dropoff_end_time": "10:00",
    }


# --- HTTP -----------------------------------------------------------------------

@pytest.fixture
def demo_provider():
    return FixtureStoreProvider()


@pytest.fixture
def client(demo_provider, email_sender, config):
    from hostel_laundry.main import create_app

    app = create_app(config=config, store_provider=demo_provider, email_sender=email_sender)
    with TestClient(app) as test_client:
        yield test_client


def login(client, email: str, password: str) -> dict:
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, "admin@college.edu", "admin123")


@pytest.fixture
def staff_headers(client):
    return login(client, "staff@college.edu", "staff123")


@pytest.fixture
def student_headers(client):
    return login(client, "john.doe@student.college.edu", "student123")
