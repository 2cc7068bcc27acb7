"""Listing Schemas — Pydantic response models for the user directory endpoints.

Invariants:
    - Response models are read from ORM objects (from_attributes), never the reverse
    - `from`/`to` are serialized under their query-parameter names so a client
      can feed the echo straight back into the next request
    - sort_links has one entry per allow-listed sortable column
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SkillResponse(BaseModel):
    """Skill as shown in listings and the filter form."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class UserResponse(BaseModel):
    """One listing row."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    role: str
    state: str
    created_at: datetime
    skills: list[SkillResponse] = []


class PaginationResponse(BaseModel):
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total: int = Field(ge=0)
    last_page: int = Field(ge=1)


class SortResponse(BaseModel):
    column: str | None = None
    direction: Literal["asc", "desc"] = "asc"


class SortLink(BaseModel):
    """(classes, url) pair for one sortable column header."""
    classes: str
    url: str


class FiltersResponse(BaseModel):
    """Normalized echo of the filters that were applied."""
    model_config = ConfigDict(populate_by_name=True)

    state: Literal["active", "inactive"] | None = None
    role: str | None = None
    skills: list[int] = []
    from_date: str | None = Field(None, alias="from")
    to_date: str | None = Field(None, alias="to")


class UserListResponse(BaseModel):
    """A page of users plus everything needed to render sort links."""
    users: list[UserResponse]
    pagination: PaginationResponse
    sort: SortResponse
    sort_links: dict[str, SortLink]
    filters: FiltersResponse
