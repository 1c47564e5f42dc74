"""
Base repository defining the storage interface used by every service.

Implementations exist for a SQLAlchemy session and for in-memory fixture
tables; both return model instances and raise the same exceptions.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from hostel_laundry.core.exceptions import ResourceNotFoundError
from hostel_laundry.models.base import BaseModel
from hostel_laundry.repositories.base.filtering import Filter, Sort

ModelType = TypeVar("ModelType", bound=BaseModel)

FilterSpec = Union[None, Mapping[str, Any], Sequence[Filter]]
SortSpec = Union[None, Sort, Sequence[Sort]]


def as_filters(filters: FilterSpec) -> List[Filter]:
    """Accept a list of Filter objects or a {field: value} equality mapping"""
    if not filters:
        return []
    if isinstance(filters, Mapping):
        return [Filter.eq(field, value) for field, value in filters.items()]
    return list(filters)


def as_sorts(order_by: SortSpec) -> List[Sort]:
    if order_by is None:
        return []
    if isinstance(order_by, Sort):
        return [order_by]
    return list(order_by)


class BaseRepository(ABC, Generic[ModelType]):
    """
    Abstract base repository with standardized operations.

    Writes commit immediately unless called with ``commit=False``, in which
    case the caller's transaction (see DataStore.transaction) decides.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def _check_fields(self, fields: Iterable[str]) -> None:
        known = set(self.model.attribute_keys())
        unknown = [field for field in fields if field not in known]
        if unknown:
            raise ValueError(f"{self.entity_name} has no attribute(s): {', '.join(unknown)}")

    # ==================== Read Operations ====================

    @abstractmethod
    def get_by_id(self, entity_id: str) -> Optional[ModelType]:
        """Fetch one entity by primary key."""

    def get_by_id_or_raise(self, entity_id: str, resource_type: Optional[str] = None) -> ModelType:
        entity = self.get_by_id(entity_id)
        if entity is None:
            raise ResourceNotFoundError(resource_type or self.entity_name, entity_id)
        return entity

    @abstractmethod
    def find(
        self,
        filters: FilterSpec = None,
        order_by: SortSpec = None,
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        """Fetch all entities matching every filter, in the given order."""

    def find_one(self, filters: FilterSpec = None, order_by: SortSpec = None) -> Optional[ModelType]:
        results = self.find(filters, order_by=order_by, limit=1)
        return results[0] if results else None

    def find_by_ids(self, ids: Iterable[str]) -> Dict[str, ModelType]:
        """Batch lookup used to join related rows without ORM relationships"""
        wanted = sorted({entity_id for entity_id in ids if entity_id})
        if not wanted:
            return {}
        return {entity.id: entity for entity in self.find([Filter("id", "in", wanted)])}

    @abstractmethod
    def count(self, filters: FilterSpec = None) -> int:
        """Count entities matching every filter."""

    # ==================== Write Operations ====================

    @abstractmethod
    def create(self, data: Mapping[str, Any], commit: bool = True) -> ModelType:
        """
        Insert a new entity.

        Raises:
            EntityAlreadyExistsError: unique constraint violated
            InvalidReferenceError: foreign key points at a missing row
        """

    def create_many(self, rows: Sequence[Mapping[str, Any]], commit: bool = True) -> List[ModelType]:
        return [self.create(row, commit=commit) for row in rows]

    @abstractmethod
    def update(self, entity_id: str, data: Mapping[str, Any], commit: bool = True) -> Optional[ModelType]:
        """Apply a partial update; returns None when the entity does not exist."""

    @abstractmethod
    def update_where(self, filters: FilterSpec, data: Mapping[str, Any], commit: bool = True) -> int:
        """Apply the same partial update to every match; returns the number of rows changed."""

    @abstractmethod
    def delete(self, entity_id: str, commit: bool = True) -> bool:
        """Delete by primary key; returns False when nothing was deleted."""

    @abstractmethod
    def delete_where(self, filters: FilterSpec, commit: bool = True) -> int:
        """Delete every match; returns the number of rows removed."""
