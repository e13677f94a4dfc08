"""Medidor repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from cliente.domain.medidor.medidor import Medidor


class MedidorRepository(ABC):
    """Repository interface for Medidor entities."""

    @abstractmethod
    async def find_by_serial_number(self, serial_number: str) -> Optional[Medidor]:
        """Find a Medidor by its serial number."""

    @abstractmethod
    async def exists_by_serial_number(self, serial_number: str) -> bool:
        """Check if a Medidor with the serial number is registered."""

    @abstractmethod
    async def list_by_cliente(self, cliente_id: int) -> list[Medidor]:
        """List all Medidores registered to a Cliente."""

    @abstractmethod
    async def save(self, medidor: Medidor) -> Medidor:
        """Insert or update a Medidor and return the stored version."""
