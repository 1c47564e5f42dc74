"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and abstract classes with the primary key and
timestamp columns shared by every table.
"""

from typing import List
from uuid import uuid4

from sqlalchemy import Column, DateTime, String, inspect
from sqlalchemy.orm import declarative_base

from hostel_laundry.utils.datetime_utils import utcnow

# Create declarative base
Base = declarative_base()


def generate_uuid() -> str:
    return str(uuid4())


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.
    """

    __abstract__ = True

    id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        nullable=False,
        comment="Primary key (UUID)"
    )

    @classmethod
    def attribute_keys(cls) -> List[str]:
        """Mapped column attribute names (may differ from column names)"""
        return [attr.key for attr in inspect(cls).column_attrs]

    def __repr__(self) -> str:
        """String representation of model instance."""
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"


class TimestampModel(BaseModel):
    """
    Base model with automatic timestamp tracking.

    Timestamps are generated in Python so every store stamps them the same way.
    """

    __abstract__ = True

    created_at = Column(
        DateTime,
        nullable=False,
        default=utcnow,
        comment="Record creation timestamp"
    )
    updated_at = Column(
        DateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        comment="Record last update timestamp"
    )
