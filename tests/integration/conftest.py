"""
Pytest configuration for integration tests.

Integration tests run against an in-memory SQLite database.
Import the shared fixtures to make them available.
"""

# Re-export shared database fixtures
from tests.shared.fixtures.database import async_engine, db_session

__all__ = [
    "async_engine",
    "db_session",
]
