"""Database engine and session management."""
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from hostel_laundry.config.settings import Settings, settings


def create_db_engine(url: str, echo: bool = False, config: Settings = settings) -> Engine:
    """
    Build an engine for the given URL.

    SQLite needs foreign keys switched on per connection; in-memory SQLite
    shares one connection so every session sees the same database.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=echo, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        pool_pre_ping=True,
        echo=echo,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_POOL_OVERFLOW,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Process-wide engine for the configured DATABASE_URL"""
    global _engine
    if _engine is None:
        _engine = create_db_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    return _engine


def SessionLocal() -> Session:
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory()
