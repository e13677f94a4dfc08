"""
In-memory SQLite fixtures for integration tests.

Provides an isolated database per test with the schema created and the
role reference rows seeded.

Usage:
    # In your test file or conftest.py
    from tests.shared.fixtures.database import db_session

    async def test_something(db_session):
        repo = ClienteRepositorySQLAlchemy(db_session)
        await repo.save(cliente)
"""

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from cliente.infrastructure.persistence.sqlalchemy import (
    create_session_maker,
    enable_sqlite_savepoints,
)
from cliente.infrastructure.persistence.sqlalchemy.init_db import (
    drop_tables,
    init_database,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def async_engine():
    """
    Create an async engine bound to a private in-memory database.

    StaticPool keeps a single connection so every session in the test sees
    the same database.
    """
    engine = enable_sqlite_savepoints(
        create_async_engine(
            TEST_DATABASE_URL,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        ),
    )
    await init_database(engine)

    yield engine

    await drop_tables(engine)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(async_engine):
    """Provide a session on the seeded test database."""
    session_maker = create_session_maker(async_engine)

    async with session_maker() as session:
        yield session

        # Rollback any uncommitted changes
        await session.rollback()
