"""Compiles Prisma-style filter dicts into SQLAlchemy boolean expressions."""

import re
from collections.abc import Collection, Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import and_, inspect as sa_inspect, not_, or_
from sqlalchemy.sql.elements import ColumnElement

from clinic.application.query.params import parse_number
from clinic.domain.exceptions import InvalidQueryError
from clinic.infrastructure.database.query.operators import (
    INSENSITIVE_MODE,
    LIST_OPERATORS,
    MODE_KEY,
    OPERATOR_MAP,
    TEXT_OPERATORS,
)

LOGICAL_KEYS = ("AND", "OR", "NOT")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake(name: str) -> str:
    """``createdAt`` -> ``created_at``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class FieldResolver:
    """Resolves client field names to the mapped attributes of one ORM model.

    Names are accepted verbatim or in camelCase. Hidden fields behave as if
    they did not exist.
    """

    def __init__(self, model: type, hidden_fields: Collection[str] = ()):
        mapper = sa_inspect(model)
        self.model = model
        self.hidden_fields = frozenset(hidden_fields)
        self._columns = {
            attr.key: attr for attr in mapper.column_attrs if attr.key not in self.hidden_fields
        }
        self._relationships = {
            rel.key: rel for rel in mapper.relationships if rel.key not in self.hidden_fields
        }

    @property
    def model_name(self) -> str:
        return self.model.__name__.removesuffix("Model")

    def column_keys(self) -> list[str]:
        return list(self._columns)

    def has_column(self, name: str) -> bool:
        return self._resolve(name, self._columns) is not None

    def column_key(self, name: str) -> str:
        key = self._resolve(name, self._columns)
        if key is None:
            raise InvalidQueryError(
                f"Unknown field '{name}' on {self.model_name}", field=name
            )
        return key

    def column(self, name: str) -> Any:
        return getattr(self.model, self.column_key(name))

    def python_type(self, name: str) -> type | None:
        attr = self._columns[self.column_key(name)]
        try:
            return attr.columns[0].type.python_type
        except NotImplementedError:
            return None

    def relationship_key(self, name: str) -> str:
        key = self._resolve(name, self._relationships)
        if key is None:
            raise InvalidQueryError(
                f"Unknown relation '{name}' on {self.model_name}", field=name
            )
        return key

    def related(self, key: str) -> "FieldResolver":
        return FieldResolver(self._relationships[key].mapper.class_, self.hidden_fields)

    def _resolve(self, name: str, attrs: Mapping[str, Any]) -> str | None:
        for candidate in (name, to_snake(name)):
            if candidate in self.hidden_fields:
                return None
            if candidate in attrs:
                return candidate
        return None


def compile_where(resolver: FieldResolver, where: Mapping[str, Any]) -> ColumnElement[bool] | None:
    """Build the WHERE expression for ``where``; None means "match everything"."""
    clauses: list[ColumnElement[bool]] = []
    for key, value in where.items():
        if key in LOGICAL_KEYS:
            parts = [
                clause
                for clause in (compile_where(resolver, item) for item in _conditions(key, value))
                if clause is not None
            ]
            if not parts:
                continue
            if key == "AND":
                clauses.append(and_(*parts))
            elif key == "OR":
                clauses.append(or_(*parts))
            else:
                clauses.append(not_(and_(*parts)))
        else:
            clauses.extend(_compile_field(resolver, key, value))

    if not clauses:
        return None
    return clauses[0] if len(clauses) == 1 else and_(*clauses)


def _conditions(key: str, value: Any) -> list[Mapping[str, Any]]:
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(item, Mapping) for item in value):
        return list(value)
    raise InvalidQueryError(f"'{key}' expects a condition or a list of conditions")


def _compile_field(resolver: FieldResolver, name: str, value: Any) -> list[ColumnElement[bool]]:
    column = resolver.column(name)
    python_type = resolver.python_type(name)

    if isinstance(value, Mapping):
        insensitive = value.get(MODE_KEY) == INSENSITIVE_MODE
        clauses = []
        for op, operand in value.items():
            if op == MODE_KEY:
                continue
            build = OPERATOR_MAP.get(op)
            if build is None:
                raise InvalidQueryError(
                    f"Unsupported operator '{op}' for field '{name}'", field=name
                )
            if op in LIST_OPERATORS:
                operand = [_coerce(name, python_type, item) for item in _split_list(operand)]
            elif op in TEXT_OPERATORS:
                operand = _coerce(name, str, operand)
            else:
                operand = _coerce(name, python_type, operand)
            clauses.append(build(column, operand, insensitive))
        return clauses

    if isinstance(value, (list, tuple)):
        return [column.in_([_coerce(name, python_type, item) for item in value])]

    return [OPERATOR_MAP["equals"](column, _coerce(name, python_type, value), False)]


def _split_list(operand: Any) -> list[Any]:
    if isinstance(operand, str):
        return [item.strip() for item in operand.split(",") if item.strip()]
    if isinstance(operand, (list, tuple)):
        return list(operand)
    return [operand]


def _coerce(name: str, python_type: type | None, value: Any) -> Any:
    """Bring an operand to the column's Python type, or raise InvalidQueryError."""
    if value is None or python_type is None:
        return value

    if python_type is str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return value if isinstance(value, str) else str(value)

    if python_type is bool:
        if isinstance(value, bool):
            return value
        if value in ("true", "false"):
            return value == "true"

    elif python_type in (int, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            number = parse_number(value)
            if number is not None:
                return number

    elif python_type is datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value)
            except ValueError:
                pass

    else:
        return value

    raise InvalidQueryError(
        f"Invalid value {value!r} for field '{name}'", field=name
    )
