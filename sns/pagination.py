"""
Page request / page result types shared by the stores and the services.

A ``PageRequest`` is handed from the HTTP layer straight through the
services to the repositories; only the repositories interpret it.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, Sequence, TypeVar

from sqlalchemy import Select, asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class PageRequest:
    """0-based page number, page size and optional sort column / direction."""

    page: int = 0
    size: int = 20
    sort: str | None = None
    direction: str = "desc"

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    items: list[T]
    total: int
    request: PageRequest = field(default_factory=PageRequest)

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.request.size) if self.total > 0 else 0

    def map(self, fn: Callable[[T], R]) -> Page[R]:
        return Page(items=[fn(item) for item in self.items], total=self.total, request=self.request)

    @classmethod
    def empty(cls, request: PageRequest | None = None) -> Page[T]:
        return cls(items=[], total=0, request=request or PageRequest())


def _order_by(model, request: PageRequest, sortable: Sequence[str]):
    # Unknown or unsafe column names fall back to the primary key.
    column_name = request.sort if request.sort in sortable else "id"
    column = getattr(model, column_name)
    return desc(column) if request.direction == "desc" else asc(column)


async def paginate(
    db: AsyncSession,
    model,
    request: PageRequest,
    *criteria,
    options: Sequence = (),
    sortable: Sequence[str] = ("id", "created_at"),
) -> Page:
    """
    Return one page of *model* rows matching *criteria*.

    Two statements are issued: a COUNT over the filtered rows and a
    SELECT with ORDER BY / OFFSET / LIMIT.  The SELECT is skipped when the
    count is zero.  *options* are loader options (``joinedload`` etc.)
    applied to the SELECT only.
    """
    count_q = select(func.count()).select_from(model).where(*criteria)
    total: int = (await db.execute(count_q)).scalar_one()
    if total == 0:
        return Page.empty(request)

    rows_q: Select = (
        select(model)
        .where(*criteria)
        .options(*options)
        .order_by(_order_by(model, request, sortable))
        .offset(request.offset)
        .limit(request.size)
    )
    result = await db.execute(rows_q)
    return Page(items=list(result.unique().scalars().all()), total=total, request=request)
