"""
Repository implementation over a SQLAlchemy session.
"""

from typing import Any, List, Mapping, Optional, Type

from sqlalchemy import and_
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_laundry.core.exceptions import (
    EntityAlreadyExistsError,
    InvalidFormatError,
    InvalidReferenceError,
    RepositoryError,
)
from hostel_laundry.core.logging import get_logger
from hostel_laundry.repositories.base.base_repository import (
    BaseRepository,
    FilterSpec,
    ModelType,
    SortSpec,
    as_filters,
    as_sorts,
)
from hostel_laundry.repositories.base.filtering import Filter, FilterOperator

logger = get_logger(__name__)

# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
INVALID_DATETIME_FORMAT = "22007"


class SQLAlchemyRepository(BaseRepository[ModelType]):
    """Repository bound to one model and one session."""

    def __init__(self, model: Type[ModelType], db: Session):
        super().__init__(model)
        self.db = db

    # ==================== Query building ====================

    def _condition(self, criterion: Filter):
        column = getattr(self.model, criterion.field)
        op = criterion.operator
        value = criterion.value
        if op == FilterOperator.EQUALS:
            return column.is_(None) if value is None else column == value
        if op == FilterOperator.NOT_EQUALS:
            return column != value
        if op == FilterOperator.GREATER_THAN:
            return column > value
        if op == FilterOperator.GREATER_THAN_EQUAL:
            return column >= value
        if op == FilterOperator.LESS_THAN:
            return column < value
        if op == FilterOperator.LESS_THAN_EQUAL:
            return column <= value
        if op == FilterOperator.IN:
            return column.in_(list(value or []))
        if op == FilterOperator.ILIKE:
            return column.ilike(value)
        if op == FilterOperator.IS_NULL:
            return column.is_(None) if value is None or value else column.isnot(None)
        raise ValueError(f"Unsupported filter operator: {op}")

    def _query(self, filters: FilterSpec):
        criteria = as_filters(filters)
        self._check_fields(criterion.field for criterion in criteria)
        query = self.db.query(self.model)
        if criteria:
            query = query.filter(and_(*[self._condition(criterion) for criterion in criteria]))
        return query

    # ==================== Error mapping ====================

    def _translate(self, exc: SQLAlchemyError, operation: str) -> RepositoryError:
        """Map driver errors onto the store-independent exceptions"""
        self.db.rollback()
        pgcode = getattr(getattr(exc, "orig", None), "pgcode", None)
        text = str(getattr(exc, "orig", exc)).lower()

        if isinstance(exc, IntegrityError):
            if pgcode == FOREIGN_KEY_VIOLATION or "foreign key" in text:
                return InvalidReferenceError(
                    f"{self.entity_name} references a record that does not exist",
                    table=self.table_name,
                )
            if pgcode == UNIQUE_VIOLATION or "unique" in text or "duplicate" in text:
                return EntityAlreadyExistsError(f"{self.entity_name} already exists", table=self.table_name)
            if pgcode == NOT_NULL_VIOLATION or "not null" in text:
                return InvalidFormatError(f"Missing required value for {self.entity_name}", table=self.table_name)
        if isinstance(exc, DataError) or pgcode == INVALID_DATETIME_FORMAT:
            return InvalidFormatError(f"Invalid data for {self.entity_name}", table=self.table_name)

        logger.error(f"{operation} on {self.table_name} failed: {exc}", exc_info=True)
        return RepositoryError(f"{operation.capitalize()} failed", operation=operation, table=self.table_name)

    def _flush_or_commit(self, commit: bool) -> None:
        if commit:
            self.db.commit()
        else:
            self.db.flush()

    # ==================== Read Operations ====================

    def get_by_id(self, entity_id: str) -> Optional[ModelType]:
        try:
            return self.db.get(self.model, entity_id)
        except SQLAlchemyError as e:
            raise self._translate(e, "read") from e

    def find(
        self,
        filters: FilterSpec = None,
        order_by: SortSpec = None,
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        sorts = as_sorts(order_by)
        self._check_fields(sort.field for sort in sorts)
        try:
            query = self._query(filters)
            for sort in sorts:
                column = getattr(self.model, sort.field)
                query = query.order_by(column.desc() if sort.descending else column.asc())
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except SQLAlchemyError as e:
            raise self._translate(e, "read") from e

    def count(self, filters: FilterSpec = None) -> int:
        try:
            return self._query(filters).count()
        except SQLAlchemyError as e:
            raise self._translate(e, "read") from e

    # ==================== Write Operations ====================

    def create(self, data: Mapping[str, Any], commit: bool = True) -> ModelType:
        self._check_fields(data)
        entity = self.model(**data)
        try:
            self.db.add(entity)
            self._flush_or_commit(commit)
        except SQLAlchemyError as e:
            raise self._translate(e, "create") from e
        logger.debug(f"Created {self.entity_name} with id: {entity.id}")
        return entity

    def update(self, entity_id: str, data: Mapping[str, Any], commit: bool = True) -> Optional[ModelType]:
        self._check_fields(data)
        entity = self.get_by_id(entity_id)
        if entity is None:
            return None
        for key, value in data.items():
            setattr(entity, key, value)
        try:
            self._flush_or_commit(commit)
        except SQLAlchemyError as e:
            raise self._translate(e, "update") from e
        return entity

    def update_where(self, filters: FilterSpec, data: Mapping[str, Any], commit: bool = True) -> int:
        self._check_fields(data)
        try:
            entities = self._query(filters).all()
            for entity in entities:
                for key, value in data.items():
                    setattr(entity, key, value)
            self._flush_or_commit(commit)
        except SQLAlchemyError as e:
            raise self._translate(e, "update") from e
        return len(entities)

    def delete(self, entity_id: str, commit: bool = True) -> bool:
        entity = self.get_by_id(entity_id)
        if entity is None:
            return False
        try:
            self.db.delete(entity)
            self._flush_or_commit(commit)
        except SQLAlchemyError as e:
            raise self._translate(e, "delete") from e
        return True

    def delete_where(self, filters: FilterSpec, commit: bool = True) -> int:
        try:
            entities = self._query(filters).all()
            for entity in entities:
                self.db.delete(entity)
            self._flush_or_commit(commit)
        except SQLAlchemyError as e:
            raise self._translate(e, "delete") from e
        return len(entities)
