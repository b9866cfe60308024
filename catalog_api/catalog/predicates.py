"""Typed predicates over product fields.

A predicate is one of TextMatch, Membership, Range, or an AllOf
conjunction of those. Predicates evaluate directly against records via
``matches`` and are compiled to SQL by the query builder.
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class TextMatch:
    """Case-insensitive substring match on a text field."""

    field: str
    text: str

    def matches(self, record: Any) -> bool:
        value = getattr(record, self.field, None)
        if value is None:
            return False
        return self.text.lower() in str(value).lower()


@dataclass(frozen=True)
class Membership:
    """Field value must equal one of ``values``."""

    field: str
    values: tuple[Any, ...]

    def matches(self, record: Any) -> bool:
        return getattr(record, self.field, None) in self.values


@dataclass(frozen=True)
class Range:
    """Inclusive bounds on an ordered field; either side may be open."""

    field: str
    lower: Any = None
    upper: Any = None

    def matches(self, record: Any) -> bool:
        value = getattr(record, self.field, None)
        if value is None:
            return False
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None and value > self.upper:
            return False
        return True


@dataclass(frozen=True)
class AllOf:
    """Conjunction of predicates. Empty means match everything."""

    predicates: tuple["Predicate", ...] = ()

    @property
    def is_match_all(self) -> bool:
        return not self.predicates

    def matches(self, record: Any) -> bool:
        return all(p.matches(record) for p in self.predicates)


Predicate = Union[TextMatch, Membership, Range, AllOf]

MATCH_ALL = AllOf()


@dataclass(frozen=True)
class SortSpec:
    """Sort by a single field, ties broken by record id.

    Attributes:
        field: Field name to order by.
        descending: Whether larger values come first.
    """

    field: str
    descending: bool = False

    def key(self, record: Any) -> tuple[Any, Any]:
        """Sort key for in-memory ordering, with id as tiebreaker."""
        return (getattr(record, self.field), getattr(record, "id", None))
