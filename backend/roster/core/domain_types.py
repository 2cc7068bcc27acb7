"""Domain Types — enums and aliases that replace bare strings in listing logic.

Invariants:
    - UserState values map 1:1 to the users.state column
    - SortDirection has exactly two states; a column switch always resets to ASC

Design Decisions:
    - str Enums: serialize to JSON and compare against DB strings without converters
    - Role stays a plain string (open set managed by the persistence layer);
      UserRole only names the roles the application seeds
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SkillId = NewType("SkillId", int)


# ─── Enums ───────────────────────────────────────────────────────

class UserState(str, Enum):
    """Account state — maps to DB `state` column."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class UserRole(str, Enum):
    """Roles the application knows about."""
    ADMIN = "admin"
    USER = "user"


class SortDirection(str, Enum):
    """Sort direction for a single listing column."""
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC
