from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, Union


class ComparisonOperator(str, Enum):
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"


@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class Comparison:
    operator: ComparisonOperator
    value: Any


FilterValue = Union[Scalar, Comparison]


@dataclass(frozen=True)
class FieldFilter:
    field: str
    condition: FilterValue


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False

    @classmethod
    def parse(cls, token: str) -> "SortKey":
        if token.startswith("-"):
            return cls(field=token[1:], descending=True)
        return cls(field=token)


@dataclass(frozen=True)
class Populate:
    """Relation to eager-load, optionally restricted to a subset of its fields."""

    relation: str
    fields: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 25

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class QuerySpec:
    filters: Tuple[FieldFilter, ...] = ()
    projection: Optional[Tuple[str, ...]] = None
    sort: Tuple[SortKey, ...] = ()
    page: PageRequest = field(default_factory=PageRequest)
    populate: Optional[Populate] = None

    @property
    def offset(self) -> int:
        return self.page.offset

    @property
    def limit(self) -> int:
        return self.page.limit
