"""Abstract data-access handle (port) consumed by the list-query builder."""

from abc import ABC, abstractmethod
from typing import Any

from clinic.domain.entities import QueryPlan


class ModelDelegate(ABC):
    """Per-model handle that can count and fetch rows for a Prisma-style filter.

    ``where`` uses the builder's vocabulary: ``{"AND": [...]}``,
    ``{"OR": [...]}``, ``{field: value}`` and ``{field: {operator: value}}``.
    """

    model_name: str = "Model"

    @abstractmethod
    async def count(self, where: dict[str, Any]) -> int:
        """Count rows matching ``where``."""
        ...

    @abstractmethod
    async def find_many(self, plan: QueryPlan) -> list[dict[str, Any]]:
        """Fetch the rows a finalized plan describes, as plain dict records."""
        ...

    def has_field(self, name: str) -> bool:
        """Whether ``name`` is a queryable field. Handles that cannot tell accept all."""
        return True
