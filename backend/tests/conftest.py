"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Factories commit their rows, so any session on the same engine sees them

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so the test
      session and the app's sessions see the same database
    - PostgreSQL-specific features are not used by the listing queries
"""

import itertools
import os
from datetime import datetime

# Never point tests at a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from roster.db.base import Base
from roster.models import Skill, User


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def skill_factory(test_db):
    """Create and commit a Skill: `await skill_factory("php")`."""

    async def create(name: str) -> Skill:
        skill = Skill(name=name)
        test_db.add(skill)
        await test_db.commit()
        return skill

    return create


@pytest.fixture
def user_factory(test_db):
    """Create and commit a User with unique, sortable defaults.

    `await user_factory(skills=[php], state="inactive", created_at=...)`
    """
    counter = itertools.count(1)

    async def create(skills=(), **fields) -> User:
        n = next(counter)
        fields.setdefault("first_name", f"First{n:03d}")
        fields.setdefault("last_name", f"Last{n:03d}")
        fields.setdefault("email", f"user{n:03d}@example.com")
        fields.setdefault("created_at", datetime(2018, 1, 1, 12, 0, 0))
        user = User(**fields)
        user.skills = list(skills)
        test_db.add(user)
        await test_db.commit()
        return user

    return create
