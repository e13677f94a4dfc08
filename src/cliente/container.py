"""Composition root.

Wires settings, the auth services and the SQLAlchemy repositories into the
application services. Long-lived pieces (engine, hashing and token
services) are built once per container; repositories and application
services are built per session so every unit of work gets its own.

Usage:
    container = ServiceContainer()
    await container.verify_startup()

    async with container.session() as session:
        result = await container.authentication_service(session).login(request)
"""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from cliente.application.services import AuthenticationService, ClienteService
from cliente.domain.shared.time import utc_now
from cliente.infrastructure.persistence.sqlalchemy import (
    ClienteRepositorySQLAlchemy,
    MedidorRepositorySQLAlchemy,
    RoleRepositorySQLAlchemy,
    create_engine_for_url,
    create_session_maker,
    session_scope,
)
from cliente_auth import ConfigurationError, JWTService, PasswordHashingService
from cliente_config import Settings, get_settings

logger = logging.getLogger(__name__)


class ServiceContainer:
    def __init__(
        self,
        settings: Settings | None = None,
        engine: AsyncEngine | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._settings = settings or get_settings()
        self._engine = engine or create_engine_for_url(self._settings.database_url)
        self._session_maker = create_session_maker(self._engine)
        self._clock = clock

        self._password_service = PasswordHashingService(
            rounds=self._settings.password_hash_rounds,
        )
        self._jwt_service = JWTService(
            secret_key=self._settings.jwt_secret_key.get_secret_value(),
            access_token_expire_minutes=self._settings.jwt_access_token_expire_minutes,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def jwt_service(self) -> JWTService:
        return self._jwt_service

    @property
    def password_service(self) -> PasswordHashingService:
        return self._password_service

    def session(self) -> AbstractAsyncContextManager[AsyncSession]:
        """Open a unit of work (commit on success, rollback on error)."""
        return session_scope(self._session_maker)

    def authentication_service(self, session: AsyncSession) -> AuthenticationService:
        return AuthenticationService(
            cliente_repository=ClienteRepositorySQLAlchemy(session),
            role_repository=RoleRepositorySQLAlchemy(session),
            password_service=self._password_service,
            jwt_service=self._jwt_service,
            default_role=self._settings.default_role,
            clock=self._clock,
        )

    def cliente_service(self, session: AsyncSession) -> ClienteService:
        return ClienteService(
            cliente_repository=ClienteRepositorySQLAlchemy(session),
            medidor_repository=MedidorRepositorySQLAlchemy(session),
        )

    async def verify_startup(self) -> None:
        """Fail fast when the default role has not been seeded.

        Raises
        ------
        ConfigurationError
            If the configured default role is missing from the database
        """
        async with self.session() as session:
            role = await RoleRepositorySQLAlchemy(session).find_by_name(
                self._settings.default_role,
            )
        if role is None:
            msg = (
                f"Default role {self._settings.default_role.value} is not seeded; "
                "run 'cliente db init'"
            )
            raise ConfigurationError(msg)
        logger.info("Startup checks passed (default role: %s)", role.name.value)

    async def dispose(self) -> None:
        await self._engine.dispose()
