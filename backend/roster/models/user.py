"""User ORM — the record browsed by the listing page.

Invariants:
    - id is an autoincrement integer (also the listing tie-breaker)
    - state is one of UserState; role is a free string (admin | user seeded)
    - created_at is always set; date-range filters compare against it

Design Decisions:
    - skills loaded with selectin: one extra IN query per page, never per row
    - Indexes on state, role, created_at: every listing filter is an equality
      or range on one of these
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roster.core.domain_types import UserRole, UserState
from roster.db.base import Base
from roster.models.user_skill import user_skills


class User(Base):
    """User entity — one row per directory entry."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.USER.value, index=True,
    )
    state: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserState.ACTIVE.value, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    # Relationships
    skills: Mapped[list["Skill"]] = relationship(
        "Skill", secondary=user_skills,
        lazy="selectin", order_by="Skill.name",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
