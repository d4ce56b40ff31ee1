from typing import Any, List, Mapping, Optional, Tuple

from bootcamp_directory.domain.exceptions import InvalidQueryError
from bootcamp_directory.domain.models.query import (
    Comparison,
    ComparisonOperator,
    FieldFilter,
    FilterValue,
    PageRequest,
    Populate,
    QuerySpec,
    Scalar,
    SortKey,
)

RESERVED_PARAMS = ("select", "sort", "page", "limit")

# largest OFFSET a 64-bit signed database integer can hold
MAX_OFFSET = 2**63 - 1


def split_csv(value: Any) -> Tuple[str, ...]:
    tokens = (token.strip() for token in str(value).split(","))
    return tuple(token for token in tokens if token)


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


class QueryTranslator:
    """Turns raw list-endpoint parameters into an immutable ``QuerySpec``.

    ``select``, ``sort``, ``page`` and ``limit`` drive projection, ordering and
    pagination; every other key is a filter, either ``field=value`` or
    ``field={op: value}`` with ``op`` one of gt, gte, lt, lte, in.
    """

    def __init__(self, default_limit: int = 25, max_limit: int = 1000, default_sort: str = "-created_at"):
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.default_sort = default_sort

    def translate(self, params: Mapping[str, Any], populate: Optional[Populate] = None) -> QuerySpec:
        raw = dict(params)
        directives = {key: raw.pop(key) for key in RESERVED_PARAMS if key in raw}

        return QuerySpec(
            filters=self.parse_filters(raw),
            projection=self.parse_projection(directives.get("select")),
            sort=self.parse_sort(directives.get("sort")),
            page=self.parse_page(directives.get("page"), directives.get("limit")),
            populate=populate,
        )

    def parse_filters(self, raw: Mapping[str, Any]) -> Tuple[FieldFilter, ...]:
        filters: List[FieldFilter] = []
        for field, value in raw.items():
            if isinstance(value, Mapping):
                for keyword, operand in value.items():
                    filters.append(FieldFilter(field, self._comparison(field, keyword, operand)))
            else:
                filters.append(FieldFilter(field, Scalar(value)))
        return tuple(filters)

    def parse_projection(self, select: Any) -> Optional[Tuple[str, ...]]:
        if not select:
            return None
        fields = split_csv(select)
        return fields or None

    def parse_sort(self, sort: Any) -> Tuple[SortKey, ...]:
        tokens = split_csv(sort) if sort else ()
        if not tokens:
            tokens = split_csv(self.default_sort)
        return tuple(SortKey.parse(token) for token in tokens)

    def parse_page(self, page: Any, limit: Any) -> PageRequest:
        limit = min(_positive_int(limit, self.default_limit), self.max_limit)
        # offset + limit must not exceed MAX_OFFSET
        last_page = (MAX_OFFSET - limit) // limit + 1
        return PageRequest(page=min(_positive_int(page, 1), last_page), limit=limit)

    def _comparison(self, field: str, keyword: Any, operand: Any) -> FilterValue:
        try:
            operator = ComparisonOperator(keyword)
        except ValueError:
            raise InvalidQueryError(f"Unsupported operator '{keyword}' on field '{field}'")

        if operator is ComparisonOperator.IN:
            if isinstance(operand, str):
                operand = tuple(operand.split(","))
            elif isinstance(operand, (list, tuple, set)):
                operand = tuple(operand)
            else:
                operand = (operand,)

        return Comparison(operator, operand)
