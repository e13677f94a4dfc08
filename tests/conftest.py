"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/              # Fast, isolated tests (mocks only)
    ├── integration/       # Tests against an in-memory SQLite database
    └── shared/            # Shared fixtures and factories

Every test gets a fresh settings cache and a throwaway JWT secret, so a
developer's local config/.env never leaks into assertions about defaults.
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from cliente_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")

TEST_JWT_SECRET = "test-secret-key-for-unit-tests-only-0123456789"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Provide a known JWT secret and an empty settings cache per test."""
    monkeypatch.setenv("JWT_SECRET_KEY", TEST_JWT_SECRET)
    clear_settings_cache()
    yield
    clear_settings_cache()
