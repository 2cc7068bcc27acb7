"""Listing Service — filtered, sorted, paginated user pages straight from SQL.

Invariants:
    - Filtering, counting and slicing run in the database; the full collection
      is never loaded into memory
    - Sort columns resolve ONLY through SORTABLE_COLUMNS; anything else falls
      back to the default order and never reaches the query as text
    - Every ordering ends with users.id, so pages are stable under ties
    - Page.items has at most page_size rows; page_number is 1-based
    - Pages past the end are empty, not errors

Design Decisions:
    - One predicate (filter_builder.build) shared by the count and page queries
    - Default order is newest first (created_at DESC, id DESC)
    - page_size is passed in by the caller (settings.users_per_page), never
      taken from the request
"""

import logging
from dataclasses import dataclass, field
from math import ceil

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.domain_types import SortDirection
from roster.core.query_state import FilterState, SortState
from roster.models.skill import Skill
from roster.models.user import User
from roster.services import filter_builder

logger = logging.getLogger(__name__)


SORTABLE_COLUMNS = {
    "first_name": User.first_name,
    "last_name": User.last_name,
    "email": User.email,
    "role": User.role,
    "state": User.state,
    "created_at": User.created_at,
}

DEFAULT_ORDER = (User.created_at.desc(), User.id.desc())


@dataclass
class Page:
    """One page of a filtered listing."""
    items: list[User] = field(default_factory=list)
    page_number: int = 1
    page_size: int = 15
    total_count: int = 0

    @property
    def last_page(self) -> int:
        return max(ceil(self.total_count / self.page_size), 1)

    @property
    def has_more(self) -> bool:
        return self.page_number < self.last_page


def resolve_order(sort: SortState) -> tuple:
    """ORDER BY clauses for sort, validated against SORTABLE_COLUMNS."""
    if sort.column is None:
        return DEFAULT_ORDER
    column = SORTABLE_COLUMNS.get(sort.column)
    if column is None:
        logger.warning(
            "Unknown sort column, using default order",
            extra={"sort_column": sort.column},
        )
        return DEFAULT_ORDER
    if sort.direction is SortDirection.DESC:
        return (column.desc(), User.id.asc())
    return (column.asc(), User.id.asc())


async def list_users(
    db: AsyncSession,
    filters: FilterState,
    sort: SortState,
    page_number: int,
    page_size: int,
) -> Page:
    """Fetch one page of users matching filters, ordered by sort."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    page_number = max(page_number, 1)
    offset = (page_number - 1) * page_size
    predicate = filter_builder.build(filters)

    total = await db.scalar(
        select(func.count()).select_from(User).where(predicate),
    ) or 0

    items: list[User] = []
    if offset < total:
        result = await db.execute(
            select(User)
            .where(predicate)
            .order_by(*resolve_order(sort))
            .offset(offset)
            .limit(page_size),
        )
        items = list(result.scalars().all())

    logger.info(
        f"Listed {len(items)} of {total} users",
        extra={
            "page": page_number,
            "total_count": total,
            "sort_column": sort.column,
        },
    )
    return Page(
        items=items, page_number=page_number,
        page_size=page_size, total_count=total,
    )


async def list_skills(db: AsyncSession) -> list[Skill]:
    """All skills by name, for building the skill filter."""
    result = await db.execute(select(Skill).order_by(Skill.name, Skill.id))
    return list(result.scalars().all())
