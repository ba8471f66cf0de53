"""Filter operators understood by the SQLAlchemy filter compiler.

Maps the operator names clients send as ``?field[op]=value`` to builders
over a mapped column. For example, ``?age[gte]=18`` uses the ``gte`` entry
to produce ``column >= 18``. The third argument is True when the filter
carries ``mode="insensitive"``.
"""

from collections.abc import Callable
from typing import Any

from sqlalchemy import func
from sqlalchemy.sql.elements import ColumnElement

OperatorBuilder = Callable[[Any, Any, bool], ColumnElement[bool]]


def _equals(column: Any, value: Any, insensitive: bool) -> ColumnElement[bool]:
    if value is None:
        return column.is_(None)
    if insensitive and isinstance(value, str):
        return func.lower(column) == value.lower()
    return column == value


def _not_equals(column: Any, value: Any, insensitive: bool) -> ColumnElement[bool]:
    if value is None:
        return column.is_not(None)
    if insensitive and isinstance(value, str):
        return func.lower(column) != value.lower()
    return column != value


def _contains(column: Any, value: str, insensitive: bool) -> ColumnElement[bool]:
    if insensitive:
        return column.icontains(value, autoescape=True)
    return column.contains(value, autoescape=True)


def _starts_with(column: Any, value: str, insensitive: bool) -> ColumnElement[bool]:
    if insensitive:
        return column.istartswith(value, autoescape=True)
    return column.startswith(value, autoescape=True)


def _ends_with(column: Any, value: str, insensitive: bool) -> ColumnElement[bool]:
    if insensitive:
        return column.iendswith(value, autoescape=True)
    return column.endswith(value, autoescape=True)


OPERATOR_MAP: dict[str, OperatorBuilder] = {
    "equals": _equals,                                   # Equal
    "not": _not_equals,                                  # Not equal
    "in": lambda column, values, _: column.in_(values),  # In a list of values
    "notIn": lambda column, values, _: column.not_in(values),
    "lt": lambda column, value, _: column < value,       # Less than
    "lte": lambda column, value, _: column <= value,     # Less than or equal
    "gt": lambda column, value, _: column > value,       # Greater than
    "gte": lambda column, value, _: column >= value,     # Greater than or equal
    "contains": _contains,                               # Substring
    "startsWith": _starts_with,
    "endsWith": _ends_with,
}

# Operators that expect a list of values, comma-separated when sent as one string.
LIST_OPERATORS = {"in", "notIn"}

# Operators whose operand is always matched as text.
TEXT_OPERATORS = {"contains", "startsWith", "endsWith"}

# Modifier key, not an operator.
MODE_KEY = "mode"
INSENSITIVE_MODE = "insensitive"
