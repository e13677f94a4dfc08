"""SQLAlchemy implementation of RoleRepository."""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cliente.domain.cliente import Role, RoleName, RoleRepository
from cliente.infrastructure.persistence.sqlalchemy.models import RoleModel

logger = logging.getLogger(__name__)


class RoleRepositorySQLAlchemy(RoleRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_name(self, name: RoleName) -> Role | None:
        stmt = select(RoleModel).where(RoleModel.role_name == RoleName(name).value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def ensure_roles(self, names: Iterable[RoleName]) -> list[Role]:
        roles = []
        for name in names:
            role = await self.find_by_name(name)
            if role is None:
                model = RoleModel(role_name=RoleName(name).value)
                self._session.add(model)
                await self._session.flush()
                logger.info("Seeded role: %s", model.role_name)
                role = self._map_to_domain(model)
            roles.append(role)
        return roles

    def _map_to_domain(self, model: RoleModel) -> Role:
        return Role(id=model.id, name=RoleName(model.role_name))
