"""Query-string parameters: the value shapes the list-query builder accepts.

Only three shapes are allowed per key:

    ?status=active                -> "active"
    ?status=a&status=b            -> ["a", "b"]
    ?age[gte]=18&age[lt]=65       -> {"gte": "18", "lt": "65"}

Anything else is dropped at the boundary by ``normalize_query_params``.
"""

import logging
import math
import re
from collections.abc import Iterable, Mapping
from typing import Any, Union

logger = logging.getLogger(__name__)

ScalarOrList = Union[str, list[str]]
QueryValue = Union[str, list[str], dict[str, ScalarOrList]]
QueryParameters = Mapping[str, QueryValue]

# Handled by dedicated QueryBuilder methods, never treated as filters.
RESERVED_QUERY_KEYS: tuple[str, ...] = (
    "searchTerm",
    "sort",
    "fields",
    "page",
    "limit",
    "days",
    "dateField",
    "populate",
)

# Values that mean "no filter" when sent by the frontend.
EMPTY_FILTER_VALUES = frozenset({"", "all", "null", "undefined"})

_BRACKET_KEY = re.compile(r"^([^\[\]]+)\[([^\[\]]*)\]$")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def auto_parse(value: Any) -> Any:
    """Convert a query-string value to bool or number when it clearly is one.

    Non-string values (already structured, e.g. lists for ``in`` filters)
    are returned unchanged.
    """
    if not isinstance(value, str):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    number = parse_number(value)
    return value if number is None else number


def parse_number(text: str) -> int | float | None:
    """Parse a finite numeric literal, or return None."""
    stripped = text.strip()
    if not stripped or not stripped.isascii() or "_" in stripped:
        return None
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        number = float(stripped)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_int_prefix(value: Any) -> int | None:
    """``parseInt(value, 10)``: the leading integer of a string, if any."""
    if not isinstance(value, str):
        return None
    match = _INT_PREFIX.match(value)
    return int(match.group(1)) if match else None


def normalize_query_params(raw: Mapping[str, Any] | None) -> dict[str, QueryValue]:
    """Return a new dict holding only keys whose values have a supported shape."""
    normalized: dict[str, QueryValue] = {}
    for key, value in (raw or {}).items():
        if not isinstance(key, str):
            continue
        shaped = _shape(value, allow_operators=True)
        if shaped is None:
            logger.debug("Ignoring query parameter %r with unsupported value %r", key, value)
            continue
        normalized[key] = shaped
    return normalized


def parse_query_string(items: Iterable[tuple[str, str]]) -> dict[str, QueryValue]:
    """Fold raw ``(key, value)`` pairs into ``QueryParameters``.

    Follows the bracket conventions of the ``qs`` parser: repeated keys become
    lists, ``key[op]=v`` becomes an operator mapping and ``key[]=v`` always
    yields a list. When a key appears both plain and bracketed, the operator
    mapping wins.
    """
    params: dict[str, Any] = {}
    for raw_key, value in items:
        match = _BRACKET_KEY.match(raw_key)
        if match is None:
            if isinstance(params.get(raw_key), dict):
                continue
            _append(params, raw_key, value)
            continue

        key, operator = match.groups()
        existing = params.get(key)
        if operator == "":
            if isinstance(existing, dict):
                continue
            params[key] = [*_as_list(existing), value]
            continue

        operators = existing if isinstance(existing, dict) else {}
        _append(operators, operator, value)
        params[key] = operators
    return params


def _shape(value: Any, *, allow_operators: bool) -> QueryValue | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        if all(isinstance(item, str) for item in value):
            return list(value)
        return None
    if allow_operators and isinstance(value, Mapping):
        operators: dict[str, ScalarOrList] = {}
        for op, operand in value.items():
            shaped = _shape(operand, allow_operators=False)
            if isinstance(op, str) and shaped is not None:
                operators[op] = shaped
        return operators
    return None


def _append(target: dict[str, Any], key: str, value: str) -> None:
    if key not in target:
        target[key] = value
    elif isinstance(target[key], list):
        target[key].append(value)
    else:
        target[key] = [target[key], value]


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
