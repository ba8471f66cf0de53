"""Fluent list-query builder: query-string parameters -> find-many plan.

Usage:
    builder = (
        QueryBuilder(delegate, params, PATIENT_QUERY_CONFIG)
        .filter()
        .search()
        .sort()
        .paginate()
        .fields()
        .populate()
        .date_wise()
    )
    rows = await delegate.find_many(builder.get_plan())
    meta = await builder.get_meta()

One builder serves one request. ``get_plan()`` and ``get_meta()`` each
compose the filter from the clause state current at call time, so calling a
configuration method between them changes what the second one sees.
"""

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from clinic.application.interfaces.model_delegate import ModelDelegate
from clinic.application.query.params import (
    EMPTY_FILTER_VALUES,
    RESERVED_QUERY_KEYS,
    QueryValue,
    auto_parse,
    normalize_query_params,
    parse_int_prefix,
    parse_number,
)
from clinic.domain.entities import PaginationMeta, QueryPlan, SortDirection
from clinic.domain.exceptions import QueryConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SORT = "-createdAt"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_DATE_FIELD = "createdAt"

PROJECTION_CONFLICT_WARNING = (
    "Cannot use 'fields' (select) and 'populate' (include) at the same time. "
    "'populate' takes precedence."
)


@dataclass(frozen=True)
class QueryBuilderConfig:
    """Per-resource allowlists for free-text search and field filters."""

    searchable_fields: Sequence[str] = ()
    filterable_fields: Sequence[str] = ()


def _local_now() -> datetime:
    # Naive local wall time; zone offsets are resolved per date in date_wise()
    return datetime.now()


class QueryBuilder:
    """Translates HTTP query parameters into a ``QueryPlan`` for a ``ModelDelegate``.

    None of the configuration methods raise: malformed input falls back to
    defaults. The only failure path is ``get_meta()`` propagating whatever the
    delegate's ``count`` raises.
    """

    def __init__(
        self,
        delegate: ModelDelegate,
        query: Mapping[str, Any] | None,
        config: QueryBuilderConfig | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ):
        config = config or QueryBuilderConfig()
        self._delegate = delegate
        self._query: dict[str, QueryValue] = normalize_query_params(query)
        self._searchable_fields = tuple(config.searchable_fields)
        self._filterable_fields = tuple(config.filterable_fields)
        self._clock = clock or _local_now
        self._check_configured_fields()

        self._plan = QueryPlan()
        self._filter_clause: dict[str, Any] = {}
        self._search_clause: dict[str, Any] = {}

    def filter(self) -> "QueryBuilder":
        """Build the field-filter clause from non-reserved, allow-listed keys.

        ``?status=active`` -> ``{"status": "active"}``
        ``?age[gte]=18``   -> ``{"age": {"gte": 18}}``
        """
        filters: dict[str, Any] = {}
        for key, value in self._query.items():
            if key in RESERVED_QUERY_KEYS or _is_empty(value):
                continue
            if key not in self._filterable_fields:
                continue

            if isinstance(value, dict):
                filters[key] = {op: auto_parse(operand) for op, operand in value.items()}
            else:
                filters[key] = auto_parse(value)

        self._filter_clause = filters
        return self

    def search(self) -> "QueryBuilder":
        """Case-insensitive substring match of ``searchTerm`` across searchable fields."""
        term = self._query.get("searchTerm")
        if isinstance(term, str) and term and self._searchable_fields:
            self._search_clause = {
                "OR": [
                    {field: {"contains": term, "mode": "insensitive"}}
                    for field in self._searchable_fields
                ]
            }
        return self

    def sort(self) -> "QueryBuilder":
        """``?sort=name,-createdAt`` -> ``[{"name": "asc"}, {"createdAt": "desc"}]``."""
        raw = self._query.get("sort")
        order_by = _parse_sort(raw) if isinstance(raw, str) else []
        self._plan.order_by = order_by or _parse_sort(DEFAULT_SORT)
        return self

    def paginate(self) -> "QueryBuilder":
        """``?page=2&limit=5`` -> ``skip=5, take=5``."""
        page = max(1, _number_or_default(self._query.get("page"), DEFAULT_PAGE))
        take = max(1, _number_or_default(self._query.get("limit"), DEFAULT_LIMIT))
        self._plan.skip = (page - 1) * take
        self._plan.take = take
        return self

    def fields(self) -> "QueryBuilder":
        """``?fields=name,email`` -> inclusion projection."""
        names = _split_names(self._query.get("fields"))
        if names:
            self._plan.select = {name: True for name in names}
        return self

    def populate(self) -> "QueryBuilder":
        """``?populate=user`` -> relation expansion; overrides ``fields``."""
        names = _split_names(self._query.get("populate"))
        if names:
            if self._plan.select is not None:
                logger.warning("QueryBuilder: %s", PROJECTION_CONFLICT_WARNING)
                self._plan.warnings.append(PROJECTION_CONFLICT_WARNING)
                self._plan.select = None
            self._plan.include = {name: True for name in names}
        return self

    def date_wise(self) -> "QueryBuilder":
        """``?days=15&dateField=createdAt`` -> rows from the last 15 days (from midnight)."""
        days = parse_int_prefix(self._query.get("days"))
        date_field = self._query.get("dateField")
        if not isinstance(date_field, str) or not date_field:
            date_field = DEFAULT_DATE_FIELD

        if days and days > 0:
            try:
                cutoff = _start_of_day(_wall_clock(self._clock()) - timedelta(days=days))
            except (OverflowError, OSError, ValueError):
                logger.debug("Ignoring out-of-range days=%s", days)
                return self
            self._filter_clause = {**self._filter_clause, date_field: {"gte": cutoff}}
        return self

    async def get_meta(self) -> PaginationMeta:
        """Run a count for the composed filter and derive pagination metadata."""
        where = self._build_where()
        total = await self._delegate.count(where)
        limit = self._plan.take
        return PaginationMeta(
            page=self._plan.skip // limit + 1,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        )

    def get_plan(self) -> QueryPlan:
        """Return the finalized plan. Safe to call repeatedly."""
        if self._plan.include is not None:
            self._plan.select = None

        plan = self._plan
        return QueryPlan(
            where=self._build_where(),
            order_by=list(plan.order_by) if plan.order_by is not None else None,
            skip=plan.skip,
            take=plan.take,
            select=dict(plan.select) if plan.select is not None else None,
            include=dict(plan.include) if plan.include is not None else None,
            warnings=list(plan.warnings),
        )

    def _build_where(self) -> dict[str, Any]:
        conditions = [
            dict(clause)
            for clause in (self._filter_clause, self._search_clause)
            if clause
        ]
        if len(conditions) > 1:
            return {"AND": conditions}
        if conditions:
            return conditions[0]
        return {}

    def _check_configured_fields(self) -> None:
        configured = dict.fromkeys((*self._searchable_fields, *self._filterable_fields))
        unknown = [name for name in configured if not self._delegate.has_field(name)]
        if unknown:
            raise QueryConfigurationError(self._delegate.model_name, unknown)


def _is_empty(value: QueryValue) -> bool:
    return isinstance(value, str) and value in EMPTY_FILTER_VALUES


def _parse_sort(text: str) -> list[dict[str, SortDirection]]:
    order_by: list[dict[str, SortDirection]] = []
    for token in text.split(","):
        token = token.strip()
        if token.startswith("-"):
            name, direction = token[1:].strip(), "desc"
        else:
            name, direction = token, "asc"
        if name:
            order_by.append({name: direction})
    return order_by


def _number_or_default(value: Any, default: int) -> int:
    # Number(value) || default
    if not isinstance(value, str):
        return default
    number = parse_number(value)
    if not number:
        return default
    return int(number)


def _split_names(value: Any) -> list[str]:
    if not isinstance(value, str):
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


def _wall_clock(now: datetime) -> datetime:
    """``now`` in a form whose calendar arithmetic respects DST.

    Naive values and ZoneInfo-aware values already do. A fixed offset other
    than UTC is what ``astimezone()`` yields for system local time, so it is
    read back as naive local wall time.
    """
    if isinstance(now.tzinfo, timezone) and now.tzinfo is not timezone.utc:
        return now.astimezone().replace(tzinfo=None)
    return now


def _start_of_day(moment: datetime) -> datetime:
    """Midnight of ``moment``'s calendar day, as an aware UTC datetime.

    Naive values are local time; the offset is the one in force on that date.
    """
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    if midnight.tzinfo is None:
        midnight = midnight.astimezone()
    return midnight.astimezone(timezone.utc)
