"""SQLAlchemy implementation of ClienteRepository."""

import logging
from typing import Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cliente.domain.cliente import (
    Cliente,
    ClienteRepository,
    Email,
    Role,
    RoleName,
    StorageConflictError,
)
from cliente.domain.shared.time import ensure_tz_aware
from cliente.infrastructure.persistence.sqlalchemy.models import ClienteModel
from cliente.infrastructure.persistence.sqlalchemy.repositories._utils import (
    is_unique_violation,
)

logger = logging.getLogger(__name__)


class ClienteRepositorySQLAlchemy(ClienteRepository):
    """SQLAlchemy implementation of the ClienteRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, cliente_id: int) -> Cliente | None:
        model = await self._find_model_by_id(cliente_id)
        return self._map_to_domain(model) if model else None

    async def find_by_rut(self, rut: str) -> Cliente | None:
        stmt = select(ClienteModel).where(ClienteModel.rut == rut.strip())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def find_by_email(self, email: Union[str, Email]) -> Cliente | None:
        email_value = email.value if isinstance(email, Email) else Email(email).value

        stmt = select(ClienteModel).where(ClienteModel.email == email_value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def exists_by_rut(self, rut: str) -> bool:
        stmt = select(ClienteModel.id).where(ClienteModel.rut == rut.strip()).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        email_value = email.value if isinstance(email, Email) else Email(email).value

        stmt = select(ClienteModel.id).where(ClienteModel.email == email_value).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def save(self, cliente: Cliente) -> Cliente:
        existing = (
            await self._find_model_by_id(cliente.id) if cliente.id is not None else None
        )

        # A SAVEPOINT confines a constraint failure to this statement; earlier
        # work in the same session survives
        try:
            async with self._session.begin_nested():
                if existing:
                    self._update_model(existing, cliente)
                    model = existing
                    await self._session.flush()
                    logger.debug("Updated cliente: %s", cliente.id)
                else:
                    model = self._map_to_model(cliente)
                    self._session.add(model)
                    await self._session.flush()
                    logger.info("Created cliente: %s (rut: %s)", model.id, model.rut)
        except IntegrityError as e:
            if is_unique_violation(e):
                logger.warning("Uniqueness conflict saving cliente rut=%s", cliente.rut)
                raise StorageConflictError("cliente", str(e.orig)) from e
            raise

        return self._map_to_domain(model, role=cliente.role)

    async def _find_model_by_id(self, cliente_id: int) -> ClienteModel | None:
        stmt = select(ClienteModel).where(ClienteModel.id == cliente_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: ClienteModel, role: Role | None = None) -> Cliente:
        if role is None:
            role = Role(id=model.role.id, name=RoleName(model.role.role_name))
        return Cliente.reconstitute(
            id=model.id,
            rut=model.rut,
            password_hash=model.password_hash,
            firstname=model.firstname,
            lastname=model.lastname,
            email=model.email,
            phone_number=model.phone_number,
            role=role,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, cliente: Cliente) -> ClienteModel:
        return ClienteModel(
            id=cliente.id,
            rut=cliente.rut,
            password_hash=cliente.password_hash,
            firstname=cliente.firstname,
            lastname=cliente.lastname,
            email=cliente.email,
            phone_number=cliente.phone_number,
            role_id=cliente.role.id,
            created_at=cliente.created_at,
            updated_at=cliente.updated_at,
        )

    def _update_model(self, model: ClienteModel, cliente: Cliente) -> None:
        model.password_hash = cliente.password_hash
        model.firstname = cliente.firstname
        model.lastname = cliente.lastname
        model.email = cliente.email
        model.phone_number = cliente.phone_number
        model.role_id = cliente.role.id
        model.updated_at = cliente.updated_at
