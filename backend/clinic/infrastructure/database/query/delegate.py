"""SQLAlchemy-backed ModelDelegate — runs QueryPlans against one ORM model."""

from collections.abc import Collection
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from clinic.application.interfaces import ModelDelegate
from clinic.domain.entities import QueryPlan
from clinic.infrastructure.database.query.compiler import FieldResolver, compile_where


class SQLAlchemyModelDelegate(ModelDelegate):
    """Implements the ModelDelegate port for a mapped model and an async session."""

    def __init__(
        self,
        session: AsyncSession,
        model: type,
        *,
        hidden_fields: Collection[str] = (),
    ):
        self._session = session
        self._model = model
        self._resolver = FieldResolver(model, hidden_fields)
        self.model_name = self._resolver.model_name

    def has_field(self, name: str) -> bool:
        return self._resolver.has_column(name)

    async def count(self, where: dict[str, Any]) -> int:
        stmt = select(func.count()).select_from(self._model)
        condition = compile_where(self._resolver, where)
        if condition is not None:
            stmt = stmt.where(condition)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def find_many(self, plan: QueryPlan) -> list[dict[str, Any]]:
        stmt = select(self._model)

        condition = compile_where(self._resolver, plan.where)
        if condition is not None:
            stmt = stmt.where(condition)

        for entry in plan.order_by or []:
            for name, direction in entry.items():
                column = self._resolver.column(name)
                stmt = stmt.order_by(column.desc() if direction == "desc" else column.asc())

        relations: list[str] = []
        for name, enabled in (plan.include or {}).items():
            if enabled:
                key = self._resolver.relationship_key(name)
                relations.append(key)
                stmt = stmt.options(selectinload(getattr(self._model, key)))

        selected: list[str] | None = None
        if plan.select and not relations:
            selected = [
                self._resolver.column_key(name)
                for name, enabled in plan.select.items()
                if enabled
            ]

        stmt = stmt.offset(plan.skip).limit(plan.take)
        result = await self._session.execute(stmt)
        return [
            self._to_record(row, selected, relations)
            for row in result.scalars().all()
        ]

    # ── Mapping ──────────────────────────────────────────────────────

    def _to_record(
        self, row: Any, selected: list[str] | None, relations: list[str]
    ) -> dict[str, Any]:
        record = _row_to_dict(row, self._resolver, selected)
        for key in relations:
            related = getattr(row, key)
            resolver = self._resolver.related(key)
            if related is None:
                record[key] = None
            elif isinstance(related, list):
                record[key] = [_row_to_dict(item, resolver) for item in related]
            else:
                record[key] = _row_to_dict(related, resolver)
        return record


def _row_to_dict(
    row: Any, resolver: FieldResolver, keys: list[str] | None = None
) -> dict[str, Any]:
    return {key: getattr(row, key) for key in (keys or resolver.column_keys())}
