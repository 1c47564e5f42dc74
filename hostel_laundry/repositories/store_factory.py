"""
Store provider selection.

The provider is chosen once, when the application starts, from settings:
a fixture provider in demo mode, otherwise a database provider. Request
handlers only ever ask the provider for a store.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.engine import Engine

from hostel_laundry.config.settings import Settings
from hostel_laundry.core.logging import get_logger
from hostel_laundry.repositories.data_store import DataStore, FixtureDataStore, SQLAlchemyDataStore
from hostel_laundry.repositories.memory_repository import MemoryTables

logger = get_logger(__name__)


class StoreProvider(ABC):
    """Hands out a DataStore per unit of work."""

    is_demo: bool = False

    @property
    def mode(self) -> str:
        return "demo" if self.is_demo else "database"

    @abstractmethod
    def open(self) -> DataStore:
        ...

    def shutdown(self) -> None:
        pass


class DatabaseStoreProvider(StoreProvider):
    def __init__(self, engine: Engine, create_tables: bool = False):
        from hostel_laundry.db.session import create_session_factory

        self.engine = engine
        self.session_factory = create_session_factory(engine)
        if create_tables:
            from hostel_laundry.db.init_db import init_db
            init_db(engine)

    def open(self) -> DataStore:
        return SQLAlchemyDataStore(self.session_factory())

    def shutdown(self) -> None:
        self.engine.dispose()


class FixtureStoreProvider(StoreProvider):
    """All stores share one set of tables for the life of the process."""

    is_demo = True

    def __init__(self, tables: Optional[MemoryTables] = None, seed: bool = True):
        self.tables = tables or MemoryTables()
        if seed:
            from hostel_laundry.repositories.fixtures.demo_data import seed_demo_data
            seed_demo_data(FixtureDataStore(self.tables))

    def open(self) -> DataStore:
        return FixtureDataStore(self.tables)


def create_store_provider(config: Settings, engine: Optional[Engine] = None) -> StoreProvider:
    """Pick the store implementation for this process"""
    if config.is_demo_mode():
        logger.warning("No database configured; serving demo fixture data from memory")
        return FixtureStoreProvider()

    if engine is None:
        from hostel_laundry.db.session import create_db_engine
        engine = create_db_engine(config.DATABASE_URL, echo=config.DATABASE_ECHO, config=config)
    logger.info(f"Using database store ({engine.url.get_backend_name()})")
    return DatabaseStoreProvider(engine, create_tables=config.AUTO_CREATE_TABLES)
