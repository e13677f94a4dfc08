"""Cliente lookup and Medidor registration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cliente.application.requests import RegisterMedidorRequest
from cliente.application.results import (
    AuthErrorCode,
    AuthFailure,
    ClienteProfile,
    ClienteResult,
    MedidorListResult,
    MedidorResult,
)
from cliente.domain.cliente import StorageConflictError
from cliente.domain.medidor import InvalidMedidorDataError, Medidor

if TYPE_CHECKING:
    from cliente.domain.cliente import ClienteRepository
    from cliente.domain.medidor import MedidorRepository

logger = logging.getLogger(__name__)

_NOT_FOUND = AuthFailure(AuthErrorCode.PRINCIPAL_NOT_FOUND, "Cliente not found")


class ClienteService:
    """Read access to Cliente profiles and registration of their Medidores."""

    def __init__(
        self,
        cliente_repository: ClienteRepository,
        medidor_repository: MedidorRepository,
    ):
        self._cliente_repo = cliente_repository
        self._medidor_repo = medidor_repository

    async def get_cliente_by_rut(self, rut: str) -> ClienteResult:
        cliente = await self._cliente_repo.find_by_rut(rut)
        if cliente is None:
            return ClienteResult(error=_NOT_FOUND)
        return ClienteResult(cliente=ClienteProfile.from_cliente(cliente))

    async def register_medidor(self, request: RegisterMedidorRequest) -> MedidorResult:
        """Register a new Medidor for the Cliente identified by ``request.rut``."""
        cliente = await self._cliente_repo.find_by_rut(request.rut)
        if cliente is None:
            return MedidorResult(error=_NOT_FOUND)

        try:
            medidor = Medidor.create(
                serial_number=request.serial_number,
                cliente_id=cliente.id,
                description=request.description,
            )
        except InvalidMedidorDataError as e:
            return MedidorResult(
                error=AuthFailure(AuthErrorCode.VALIDATION_ERROR, str(e)),
            )

        if await self._medidor_repo.exists_by_serial_number(medidor.serial_number):
            return MedidorResult(
                error=AuthFailure(
                    AuthErrorCode.DUPLICATE_MEDIDOR,
                    f"Medidor '{medidor.serial_number}' is already registered",
                ),
            )

        try:
            medidor = await self._medidor_repo.save(medidor)
        except StorageConflictError:
            return MedidorResult(
                error=AuthFailure(
                    AuthErrorCode.STORAGE_CONFLICT,
                    "Medidor was registered concurrently",
                ),
            )

        logger.info("Medidor %s registered for %s", medidor.serial_number, cliente.rut)
        return MedidorResult(medidor=medidor, message="Medidor registered successfully")

    async def list_medidores(self, rut: str) -> MedidorListResult:
        cliente = await self._cliente_repo.find_by_rut(rut)
        if cliente is None:
            return MedidorListResult(error=_NOT_FOUND)

        medidores = await self._medidor_repo.list_by_cliente(cliente.id)
        return MedidorListResult(medidores=tuple(medidores))
