"""
In-memory repository used by the demo (fixture) store.

Rows are held as plain dicts keyed by attribute name and handed out as fresh,
detached model instances, so callers can only change stored data through the
repository. Column defaults, unique constraints and foreign keys are enforced
from the model's table definition, the same way the database enforces them.
"""

import copy
import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from sqlalchemy import UniqueConstraint, inspect

from hostel_laundry.core.exceptions import (
    EntityAlreadyExistsError,
    InvalidFormatError,
    InvalidReferenceError,
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
from hostel_laundry.repositories.base.filtering import matches

logger = get_logger(__name__)

Row = Dict[str, Any]


class MemoryTables:
    """
    Shared row storage for a set of in-memory repositories.

    A transaction holds the lock and a snapshot of every table; rollback
    restores the snapshot.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self._data: Dict[str, Dict[str, Row]] = {}
        self._repositories: Dict[str, "InMemoryRepository"] = {}
        self._snapshot: Optional[Dict[str, Dict[str, Row]]] = None
        self._depth = 0

    def table(self, name: str) -> Dict[str, Row]:
        return self._data.setdefault(name, {})

    def register(self, repository: "InMemoryRepository") -> None:
        self._repositories[repository.table_name] = repository
        self.table(repository.table_name)

    def repositories(self) -> List["InMemoryRepository"]:
        return list(self._repositories.values())

    def begin(self) -> None:
        self.lock.acquire()
        if self._depth == 0:
            self._snapshot = copy.deepcopy(self._data)
        self._depth += 1

    def commit(self) -> None:
        if self._depth == 0:
            return
        self._depth -= 1
        if self._depth == 0:
            self._snapshot = None
        self.lock.release()

    def rollback(self) -> None:
        if self._depth == 0:
            return
        self._depth -= 1
        if self._depth == 0 and self._snapshot is not None:
            self._data = self._snapshot
            self._snapshot = None
        self.lock.release()

    def clear(self) -> None:
        with self.lock:
            for rows in self._data.values():
                rows.clear()


class InMemoryRepository(BaseRepository[ModelType]):
    """Repository over one table of a MemoryTables instance."""

    def __init__(self, model: Type[ModelType], tables: MemoryTables):
        super().__init__(model)
        self.tables = tables

        mapper = inspect(model)
        self._columns = {attr.key: attr.columns[0] for attr in mapper.column_attrs}
        key_by_name = {column.name: key for key, column in self._columns.items()}
        self._unique_sets = self._collect_unique_sets(key_by_name)
        self.foreign_keys: Dict[str, str] = {
            key: next(iter(column.foreign_keys)).column.table.name
            for key, column in self._columns.items()
            if column.foreign_keys
        }
        tables.register(self)

    def _collect_unique_sets(self, key_by_name: Dict[str, str]) -> List[Tuple[str, ...]]:
        unique_sets = set()
        for column in self.model.__table__.columns:
            if column.unique:
                unique_sets.add((key_by_name[column.name],))
        for constraint in self.model.__table__.constraints:
            if isinstance(constraint, UniqueConstraint):
                unique_sets.add(tuple(key_by_name[column.name] for column in constraint.columns))
        return sorted(unique_sets)

    @property
    def _rows(self) -> Dict[str, Row]:
        return self.tables.table(self.table_name)

    def _materialize(self, row: Row) -> ModelType:
        return self.model(**row)

    # ==================== Column semantics ====================

    @staticmethod
    def _column_default(column, kind: str = "default") -> Any:
        default = getattr(column, kind)
        if default is None:
            return None
        if default.is_callable:
            return default.arg(None)
        if default.is_scalar:
            return default.arg
        return None

    def _coerce(self, key: str, value: Any) -> Any:
        enum_class = getattr(self._columns[key].type, "enum_class", None)
        if enum_class is not None and value is not None and not isinstance(value, enum_class):
            try:
                return enum_class(value)
            except ValueError:
                raise InvalidFormatError(f"Invalid value '{value}' for {self.entity_name}.{key}", table=self.table_name)
        return value

    def _validate(self, row: Row, own_id: Optional[str]) -> None:
        for key, column in self._columns.items():
            if row.get(key) is None and not column.nullable:
                raise InvalidFormatError(f"{self.entity_name}.{key} is required", table=self.table_name)

        for unique_set in self._unique_sets:
            values = tuple(row.get(key) for key in unique_set)
            if any(value is None for value in values):
                continue
            for other_id, other in self._rows.items():
                if other_id != own_id and tuple(other.get(key) for key in unique_set) == values:
                    raise EntityAlreadyExistsError(
                        f"{self.entity_name} already exists",
                        table=self.table_name,
                        fields=list(unique_set),
                    )

        for key, referenced_table in self.foreign_keys.items():
            value = row.get(key)
            if value is not None and value not in self.tables.table(referenced_table):
                raise InvalidReferenceError(
                    f"{self.entity_name} references a record that does not exist",
                    table=self.table_name,
                    field=key,
                )

    def _check_not_referenced(self, entity_id: str) -> None:
        for repository in self.tables.repositories():
            for key, referenced_table in repository.foreign_keys.items():
                if referenced_table != self.table_name:
                    continue
                if any(row.get(key) == entity_id for row in repository._rows.values()):
                    raise InvalidReferenceError(
                        f"{self.entity_name} is still referenced by {repository.entity_name}",
                        table=repository.table_name,
                        field=key,
                    )

    def _select(self, filters: FilterSpec) -> List[Row]:
        criteria = as_filters(filters)
        self._check_fields(criterion.field for criterion in criteria)
        return [row for row in self._rows.values() if all(matches(row, criterion) for criterion in criteria)]

    # ==================== Read Operations ====================

    def get_by_id(self, entity_id: str) -> Optional[ModelType]:
        row = self._rows.get(entity_id)
        return self._materialize(row) if row is not None else None

    def find(
        self,
        filters: FilterSpec = None,
        order_by: SortSpec = None,
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        sorts = as_sorts(order_by)
        self._check_fields(sort.field for sort in sorts)
        with self.tables.lock:
            rows = self._select(filters)
        # Stable sorts applied last key first; NULLs sort last ascending, first descending
        for sort in reversed(sorts):
            rows.sort(
                key=lambda row, field=sort.field: (row.get(field) is None, row.get(field) if row.get(field) is not None else 0),
                reverse=sort.descending,
            )
        if limit is not None:
            rows = rows[:limit]
        return [self._materialize(row) for row in rows]

    def count(self, filters: FilterSpec = None) -> int:
        with self.tables.lock:
            return len(self._select(filters))

    # ==================== Write Operations ====================

    def create(self, data: Mapping[str, Any], commit: bool = True) -> ModelType:
        self._check_fields(data)
        row: Row = {}
        for key, column in self._columns.items():
            if key in data:
                row[key] = self._coerce(key, data[key])
            else:
                row[key] = self._coerce(key, self._column_default(column))

        with self.tables.lock:
            if row["id"] in self._rows:
                raise EntityAlreadyExistsError(f"{self.entity_name} already exists", table=self.table_name)
            self._validate(row, own_id=None)
            self._rows[row["id"]] = row

        logger.debug(f"Created {self.entity_name} with id: {row['id']}")
        return self._materialize(row)

    def _apply_update(self, row: Row, data: Mapping[str, Any]) -> Row:
        updated = dict(row)
        for key, value in data.items():
            updated[key] = self._coerce(key, value)
        for key, column in self._columns.items():
            if key not in data and column.onupdate is not None:
                updated[key] = self._column_default(column, "onupdate")
        self._validate(updated, own_id=row["id"])
        return updated

    def update(self, entity_id: str, data: Mapping[str, Any], commit: bool = True) -> Optional[ModelType]:
        self._check_fields(data)
        with self.tables.lock:
            row = self._rows.get(entity_id)
            if row is None:
                return None
            updated = self._apply_update(row, data)
            self._rows[entity_id] = updated
        return self._materialize(updated)

    def update_where(self, filters: FilterSpec, data: Mapping[str, Any], commit: bool = True) -> int:
        self._check_fields(data)
        with self.tables.lock:
            targets = self._select(filters)
            updated_rows = [self._apply_update(row, data) for row in targets]
            for updated in updated_rows:
                self._rows[updated["id"]] = updated
        return len(updated_rows)

    def delete(self, entity_id: str, commit: bool = True) -> bool:
        with self.tables.lock:
            if entity_id not in self._rows:
                return False
            self._check_not_referenced(entity_id)
            del self._rows[entity_id]
        return True

    def delete_where(self, filters: FilterSpec, commit: bool = True) -> int:
        with self.tables.lock:
            targets = self._select(filters)
            for row in targets:
                self._check_not_referenced(row["id"])
            for row in targets:
                del self._rows[row["id"]]
        return len(targets)
