"""Shared pytest fixtures for all test suites."""

from tests.shared.fixtures.database import async_engine, db_session
from tests.shared.fixtures.factories import ClienteFactory

__all__ = [
    "ClienteFactory",
    "async_engine",
    "db_session",
]
