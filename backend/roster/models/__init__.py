"""ORM Models — SQLAlchemy declarative models for the user directory.

Invariants:
    - All models inherit from Base (db/base.py)
    - This package is read by the listing core; writes happen elsewhere

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from roster.models.user_skill import user_skills  # noqa: F401
from roster.models.skill import Skill  # noqa: F401
from roster.models.user import User  # noqa: F401
