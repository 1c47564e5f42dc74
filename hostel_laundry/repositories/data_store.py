"""
Data stores: one repository per entity behind a single unit-of-work object.

Services depend only on DataStore. The live store wraps a SQLAlchemy session;
the fixture store wraps process-wide in-memory tables used in demo mode.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.orm import Session

from hostel_laundry.core.logging import get_logger
from hostel_laundry.models import (
    ActivityLog,
    DateSchedule,
    LaundryBatch,
    LaundrySchedule,
    Notification,
    ScheduleTemplate,
    TemplateSchedule,
    User,
)
from hostel_laundry.repositories.base.base_repository import BaseRepository
from hostel_laundry.repositories.memory_repository import InMemoryRepository, MemoryTables
from hostel_laundry.repositories.sqlalchemy_repository import SQLAlchemyRepository

logger = get_logger(__name__)


class DataStore(ABC):
    """Unit of work exposing one repository per table."""

    is_demo: bool = False

    users: BaseRepository[User]
    batches: BaseRepository[LaundryBatch]
    schedules: BaseRepository[LaundrySchedule]
    date_schedules: BaseRepository[DateSchedule]
    templates: BaseRepository[ScheduleTemplate]
    template_schedules: BaseRepository[TemplateSchedule]
    notifications: BaseRepository[Notification]
    activity_logs: BaseRepository[ActivityLog]

    @abstractmethod
    def begin(self) -> None:
        """Start a transaction spanning several repository writes."""

    @abstractmethod
    def commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        ...

    def close(self) -> None:
        pass

    @contextmanager
    def transaction(self) -> Iterator["DataStore"]:
        """
        Group writes made with ``commit=False`` into one atomic unit.

        Usage:
            with store.transaction():
                store.schedules.create(data, commit=False)
                store.schedules.update(schedule_id, changes, commit=False)
        """
        self.begin()
        try:
            yield self
        except Exception:
            self.rollback()
            logger.warning("Transaction rolled back", exc_info=True)
            raise
        else:
            self.commit()


class SQLAlchemyDataStore(DataStore):
    """Live store bound to one database session."""

    def __init__(self, db: Session):
        self.db = db
        self.users = SQLAlchemyRepository(User, db)
        self.batches = SQLAlchemyRepository(LaundryBatch, db)
        self.schedules = SQLAlchemyRepository(LaundrySchedule, db)
        self.date_schedules = SQLAlchemyRepository(DateSchedule, db)
        self.templates = SQLAlchemyRepository(ScheduleTemplate, db)
        self.template_schedules = SQLAlchemyRepository(TemplateSchedule, db)
        self.notifications = SQLAlchemyRepository(Notification, db)
        self.activity_logs = SQLAlchemyRepository(ActivityLog, db)

    def begin(self) -> None:
        # Sessions begin implicitly on first use
        pass

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        self.db.close()


class FixtureDataStore(DataStore):
    """Demo store over in-memory tables."""

    is_demo = True

    def __init__(self, tables: Optional[MemoryTables] = None):
        self.tables = tables or MemoryTables()
        self.users = InMemoryRepository(User, self.tables)
        self.batches = InMemoryRepository(LaundryBatch, self.tables)
        self.schedules = InMemoryRepository(LaundrySchedule, self.tables)
        self.date_schedules = InMemoryRepository(DateSchedule, self.tables)
        self.templates = InMemoryRepository(ScheduleTemplate, self.tables)
        self.template_schedules = InMemoryRepository(TemplateSchedule, self.tables)
        self.notifications = InMemoryRepository(Notification, self.tables)
        self.activity_logs = InMemoryRepository(ActivityLog, self.tables)

    def begin(self) -> None:
        self.tables.begin()

    def commit(self) -> None:
        self.tables.commit()

    def rollback(self) -> None:
        self.tables.rollback()
