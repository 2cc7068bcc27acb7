"""user_skills association table — many-to-many link between users and skills.

Invariants:
    - Composite primary key (user_id, skill_id): a user holds a skill at most once
    - Rows cascade away with either side

Design Decisions:
    - Plain Table, not a mapped class: the link carries no attributes of its own
    - Indexed on skill_id: the skill filter groups rows by user after a skill_id IN (...)
"""

from sqlalchemy import Column, ForeignKey, Integer, Table

from roster.db.base import Base


user_skills = Table(
    "user_skills",
    Base.metadata,
    Column(
        "user_id", Integer,
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "skill_id", Integer,
        ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True,
        index=True,
    ),
)
