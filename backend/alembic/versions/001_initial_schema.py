"""Initial schema — users, skills, user_skills.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("state", sa.String(20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_state", "users", ["state"])
    op.create_index("ix_users_created_at", "users", ["created_at"])

    op.create_table(
        "skills",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        "user_skills",
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("skill_id", sa.Integer, sa.ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_index("ix_user_skills_skill_id", "user_skills", ["skill_id"])


def downgrade() -> None:
    op.drop_index("ix_user_skills_skill_id", table_name="user_skills")
    op.drop_table("user_skills")
    op.drop_table("skills")
    op.drop_index("ix_users_created_at", table_name="users")
    op.drop_index("ix_users_state", table_name="users")
    op.drop_index("ix_users_role", table_name="users")
    op.drop_table("users")
