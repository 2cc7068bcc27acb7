"""User Directory — filtered, sortable, paginated listing of users.

Invariants:
    - All listing state comes from the request's query string (no sessions, no cookies)
    - Unknown or malformed parameters never produce a 4xx; they are ignored
    - Page size is settings.users_per_page; clients cannot change it

Design Decisions:
    - Query string read via request.query_params instead of typed Query(...)
      arguments: skills[]/skills[N] keys and permissive coercion are handled by
      core.query_state, one place for both this route and Sortable
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from roster.config import Settings, get_settings
from roster.core import query_state
from roster.core.sortable import Sortable
from roster.infrastructure.database import get_db
from roster.schemas.listing import (
    FiltersResponse,
    PaginationResponse,
    SortResponse,
    UserListResponse,
    UserResponse,
)
from roster.services import listing_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """List users. Filters: state, role, skills[], from, to. Sort: order. Page: page."""
    params = query_state.collect_params(request.query_params.multi_items())
    sort, filters = query_state.parse(params)
    page_number = query_state.parse_page(params)

    page = await listing_service.list_users(
        db, filters, sort, page_number, settings.users_per_page,
    )

    base_url = str(request.url.replace(query=""))
    sortable = Sortable.from_params(base_url, params)

    return UserListResponse(
        users=[UserResponse.model_validate(user) for user in page.items],
        pagination=PaginationResponse(
            page=page.page_number,
            page_size=page.page_size,
            total=page.total_count,
            last_page=page.last_page,
        ),
        sort=SortResponse(column=sort.column, direction=sort.direction.value),
        sort_links=sortable.links(listing_service.SORTABLE_COLUMNS),
        filters=FiltersResponse(**filters.to_dict()),
    )
