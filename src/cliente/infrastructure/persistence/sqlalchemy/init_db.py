"""Database initialization utilities."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from cliente.domain.cliente import Role, RoleName
from cliente.infrastructure.persistence.sqlalchemy.base import Base
from cliente.infrastructure.persistence.sqlalchemy.repositories import (
    RoleRepositorySQLAlchemy,
)
from cliente.infrastructure.persistence.sqlalchemy.session import (
    create_session_maker,
    session_scope,
)

# Import models to register with Base.metadata
import cliente.infrastructure.persistence.sqlalchemy.models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


async def drop_tables(engine: AsyncEngine) -> None:
    """
    Drop all database tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    logger.info("Database tables dropped successfully")


async def seed_roles(engine: AsyncEngine) -> list[Role]:
    """Insert the role reference rows that registration depends on."""
    async with session_scope(create_session_maker(engine)) as session:
        roles = await RoleRepositorySQLAlchemy(session).ensure_roles(list(RoleName))

    logger.info("Roles available: %s", ", ".join(r.name.value for r in roles))
    return roles


async def init_database(engine: AsyncEngine) -> None:
    """Create missing tables and seed reference data."""
    await create_tables(engine)
    await seed_roles(engine)
