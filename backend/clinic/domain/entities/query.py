"""Domain value objects produced by the list-query builder."""

from dataclasses import dataclass, field
from typing import Any, Literal

SortDirection = Literal["asc", "desc"]

DEFAULT_TAKE = 20


@dataclass
class QueryPlan:
    """Everything a "find many" call needs: filter, order, window, projection.

    ``select`` (inclusion projection) and ``include`` (relation expansion)
    are mutually exclusive in a finalized plan; ``include`` wins.
    """

    where: dict[str, Any] = field(default_factory=dict)
    order_by: list[dict[str, SortDirection]] | None = None
    skip: int = 0
    take: int = DEFAULT_TAKE
    select: dict[str, bool] | None = None
    include: dict[str, bool] | None = None
    warnings: list[str] = field(default_factory=list)

    def to_find_many_args(self) -> dict[str, Any]:
        """Render the plan as a Prisma-style ``findMany`` argument dict."""
        args: dict[str, Any] = {
            "where": self.where,
            "orderBy": self.order_by,
            "skip": self.skip,
            "take": self.take,
        }
        if self.include is not None:
            args["include"] = self.include
        elif self.select is not None:
            args["select"] = self.select
        return args


@dataclass
class PaginationMeta:
    """Pagination metadata derived from skip/take and a count query."""

    page: int
    limit: int
    total: int
    total_pages: int


@dataclass
class PaginatedResult:
    """One page of records plus its pagination metadata."""

    data: list[dict[str, Any]]
    meta: PaginationMeta
    warnings: list[str] = field(default_factory=list)
