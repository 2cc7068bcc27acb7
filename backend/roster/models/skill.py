"""Skill ORM — a named competence users can be tagged with."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from roster.db.base import Base


class Skill(Base):
    """Skill entity — filterable via the skills[] parameter."""
    __tablename__ = "skills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
