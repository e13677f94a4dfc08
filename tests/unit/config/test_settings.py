"""Unit tests for Settings."""

import pytest
from pydantic import ValidationError

from cliente_auth import RoleName
from cliente_config import Settings, clear_settings_cache, get_settings


def _settings(**overrides) -> Settings:
    # Ignore any .env file so only the test environment is read
    return Settings(_env_file=None, **overrides)


class TestSettingsDefaults:
    def test_defaults(self):
        settings = _settings()

        assert settings.jwt_access_token_expire_minutes == 15
        assert settings.default_role == RoleName.USER
        assert settings.password_hash_rounds == 12
        assert settings.log_level == "INFO"

    def test_secret_is_not_exposed_in_repr(self):
        settings = _settings()

        assert "test-secret-key" not in repr(settings)

    def test_settings_are_frozen(self):
        settings = _settings()

        with pytest.raises(ValidationError):
            settings.log_level = "DEBUG"


class TestSettingsValidation:
    def test_missing_secret_raises(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)

        with pytest.raises(ValidationError, match="jwt_secret_key"):
            _settings()

    def test_empty_secret_raises(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET_KEY", "")

        with pytest.raises(ValidationError, match="cannot be empty"):
            _settings()

    @pytest.mark.parametrize("minutes", ["0", "-1"])
    def test_non_positive_lifetime_raises(self, monkeypatch, minutes):
        monkeypatch.setenv("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", minutes)

        with pytest.raises(ValidationError):
            _settings()

    @pytest.mark.parametrize("rounds", ["3", "32"])
    def test_bcrypt_rounds_out_of_range(self, monkeypatch, rounds):
        monkeypatch.setenv("PASSWORD_HASH_ROUNDS", rounds)

        with pytest.raises(ValidationError):
            _settings()

    def test_default_role_from_environment(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_ROLE", "ADMIN")

        assert _settings().default_role == RoleName.ADMIN

    def test_unknown_default_role_raises(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_ROLE", "AUDITOR")

        with pytest.raises(ValidationError):
            _settings()


class TestDatabaseUrl:
    def test_sqlite_url(self):
        settings = _settings(database_backend="sqlite", sqlite_path="data/test.db")

        assert settings.database_url == "sqlite+aiosqlite:///data/test.db"

    def test_postgres_url(self):
        settings = _settings(
            database_backend="postgresql",
            postgres_user="app",
            postgres_password="pw",
            postgres_host="db",
            postgres_port=5433,
            postgres_db="clientes",
        )

        assert settings.database_url == "postgresql+asyncpg://app:pw@db:5433/clientes"


class TestGetSettings:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "30")
        clear_settings_cache()

        second = get_settings()

        assert second is not first
        assert second.jwt_access_token_expire_minutes == 30
