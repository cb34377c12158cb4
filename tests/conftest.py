"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Environment defaults set before messagely.config.get_settings() is first called
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - bcrypt runs at its minimum work factor so tests stay fast

Design Decisions:
    - SQLite in-memory: fast, no external dependency; FK pragma makes referential
      behaviour match PostgreSQL
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789abcdef-0123")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

import messagely.models  # noqa: E402,F401
from messagely.core.domain_types import SecurityConfig  # noqa: E402
from messagely.db.base import Base  # noqa: E402
from messagely.infrastructure.database import create_engine_for  # noqa: E402
from messagely.infrastructure.password_hashing import PasswordHasher  # noqa: E402


@pytest.fixture
def security_config() -> SecurityConfig:
    return SecurityConfig(
        secret_key=os.environ["SECRET_KEY"], bcrypt_work_factor=4,
    )


@pytest.fixture
def hasher(security_config) -> PasswordHasher:
    return PasswordHasher(security_config)


@pytest.fixture
async def test_engine():
    engine = create_engine_for("sqlite+aiosqlite:///:memory:")
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
