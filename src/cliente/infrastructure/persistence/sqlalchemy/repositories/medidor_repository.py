"""SQLAlchemy implementation of MedidorRepository."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cliente.domain.cliente import StorageConflictError
from cliente.domain.medidor import Medidor, MedidorRepository
from cliente.domain.shared.time import ensure_tz_aware
from cliente.infrastructure.persistence.sqlalchemy.models import MedidorModel
from cliente.infrastructure.persistence.sqlalchemy.repositories._utils import (
    is_unique_violation,
)

logger = logging.getLogger(__name__)


class MedidorRepositorySQLAlchemy(MedidorRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_serial_number(self, serial_number: str) -> Medidor | None:
        stmt = select(MedidorModel).where(
            MedidorModel.serial_number == serial_number.strip(),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def exists_by_serial_number(self, serial_number: str) -> bool:
        return await self.find_by_serial_number(serial_number) is not None

    async def list_by_cliente(self, cliente_id: int) -> list[Medidor]:
        stmt = (
            select(MedidorModel)
            .where(MedidorModel.cliente_id == cliente_id)
            .order_by(MedidorModel.created_at, MedidorModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def save(self, medidor: Medidor) -> Medidor:
        existing = None
        if medidor.id is not None:
            existing = await self._session.get(MedidorModel, medidor.id)

        try:
            async with self._session.begin_nested():
                if existing:
                    existing.serial_number = medidor.serial_number
                    existing.description = medidor.description
                    existing.cliente_id = medidor.cliente_id
                    model = existing
                else:
                    model = MedidorModel(
                        id=medidor.id,
                        serial_number=medidor.serial_number,
                        description=medidor.description,
                        cliente_id=medidor.cliente_id,
                        created_at=medidor.created_at,
                    )
                    self._session.add(model)
                await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise StorageConflictError("medidor", str(e.orig)) from e
            raise

        logger.info(
            "Saved medidor %s for cliente %s",
            model.serial_number,
            model.cliente_id,
        )
        return self._map_to_domain(model)

    def _map_to_domain(self, model: MedidorModel) -> Medidor:
        return Medidor(
            id=model.id,
            serial_number=model.serial_number,
            description=model.description,
            cliente_id=model.cliente_id,
            created_at=ensure_tz_aware(model.created_at),
        )
