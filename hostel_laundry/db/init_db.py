"""Database initialization utilities."""
import argparse
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from hostel_laundry.core.logging import get_logger
from hostel_laundry.models import Base

logger = get_logger(__name__)


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Create any missing tables.

    Suitable for development and small deployments; existing tables are left alone.
    """
    if engine is None:
        from hostel_laundry.db.session import get_engine
        engine = get_engine()

    existing_tables = set(inspect(engine).get_table_names())
    missing = [name for name in Base.metadata.tables if name not in existing_tables]
    if missing:
        Base.metadata.create_all(bind=engine)
        logger.info(f"Created database tables: {', '.join(sorted(missing))}")
    else:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")


def drop_db(engine: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data!
    """
    if engine is None:
        from hostel_laundry.db.session import get_engine
        engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")


def reset_db(engine: Optional[Engine] = None) -> None:
    """Drop and recreate all tables."""
    drop_db(engine)
    init_db(engine)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or reset the laundry service tables")
    parser.add_argument("--reset", action="store_true", help="drop all tables before creating them")
    parser.add_argument("--seed-demo", action="store_true", help="load the demo accounts and schedules")
    args = parser.parse_args()

    from hostel_laundry.config.logging import setup_logging
    setup_logging()

    if args.reset:
        reset_db()
    else:
        init_db()

    if args.seed_demo:
        from hostel_laundry.db.session import SessionLocal
        from hostel_laundry.repositories.data_store import SQLAlchemyDataStore
        from hostel_laundry.repositories.fixtures.demo_data import seed_demo_data

        store = SQLAlchemyDataStore(SessionLocal())
        try:
            seed_demo_data(store)
        finally:
            store.close()


if __name__ == "__main__":
    main()
