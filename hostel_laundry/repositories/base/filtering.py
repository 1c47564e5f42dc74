"""
Store-independent filter and sort criteria.

Both repository implementations translate these into their own terms:
SQL expressions for the database store, predicates for the in-memory store.
"""

import re
from enum import Enum
from typing import Any, Callable, Dict


class FilterOperator(str, Enum):
    """Filter operation types."""
    EQUALS = "eq"
    NOT_EQUALS = "ne"
    GREATER_THAN = "gt"
    GREATER_THAN_EQUAL = "gte"
    LESS_THAN = "lt"
    LESS_THAN_EQUAL = "lte"
    IN = "in"
    ILIKE = "ilike"
    IS_NULL = "is_null"


class Filter:
    """Single filter condition."""

    def __init__(self, field: str, operator: FilterOperator, value: Any = None):
        self.field = field
        self.operator = FilterOperator(operator)
        self.value = value

    @classmethod
    def eq(cls, field: str, value: Any) -> "Filter":
        return cls(field, FilterOperator.EQUALS, value)

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "operator": self.operator.value, "value": self.value}

    def __repr__(self) -> str:
        return f"Filter({self.field} {self.operator.value} {self.value!r})"


class Sort:
    """Ordering on one attribute."""

    def __init__(self, field: str, descending: bool = False):
        self.field = field
        self.descending = descending

    @classmethod
    def desc(cls, field: str) -> "Sort":
        return cls(field, descending=True)

    def __repr__(self) -> str:
        return f"Sort({self.field} {'desc' if self.descending else 'asc'})"


def like_to_regex(pattern: str) -> "re.Pattern[str]":
    """Translate a SQL LIKE pattern (% and _ wildcards) into a case-insensitive regex"""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("^" + "".join(parts) + "$", re.IGNORECASE | re.DOTALL)


def _compare(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(actual: Any, expected: Any) -> bool:
        if actual is None or expected is None:
            return False
        return op(actual, expected)
    return check


PREDICATES: Dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.EQUALS: lambda actual, expected: actual is not None and actual == expected,
    FilterOperator.NOT_EQUALS: lambda actual, expected: actual is not None and actual != expected,
    FilterOperator.GREATER_THAN: _compare(lambda a, b: a > b),
    FilterOperator.GREATER_THAN_EQUAL: _compare(lambda a, b: a >= b),
    FilterOperator.LESS_THAN: _compare(lambda a, b: a < b),
    FilterOperator.LESS_THAN_EQUAL: _compare(lambda a, b: a <= b),
    FilterOperator.IN: lambda actual, expected: actual in list(expected or []),
    FilterOperator.ILIKE: lambda actual, expected: (
        actual is not None and like_to_regex(expected).match(str(actual)) is not None
    ),
    FilterOperator.IS_NULL: lambda actual, expected: (actual is None) == (expected is None or bool(expected)),
}


def matches(values: Dict[str, Any], criterion: Filter) -> bool:
    """Evaluate one filter against a row held as a dict"""
    predicate = PREDICATES[criterion.operator]
    return predicate(values.get(criterion.field), criterion.value)
