"""Cliente repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from cliente.domain.cliente.aggregates.cliente import Cliente
from cliente.domain.cliente.value_objects.email import Email


class ClienteRepository(ABC):
    """Repository interface for Cliente aggregates.

    Implementations must enforce rut and email uniqueness at the storage
    level and raise StorageConflictError when a save violates it.
    """

    @abstractmethod
    async def find_by_id(self, cliente_id: int) -> Optional[Cliente]:
        """Find a Cliente by its internal ID."""

    @abstractmethod
    async def find_by_rut(self, rut: str) -> Optional[Cliente]:
        """Find a Cliente by its login identifier."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[Cliente]:
        """Find a Cliente by its email address."""

    @abstractmethod
    async def exists_by_rut(self, rut: str) -> bool:
        """Check if a Cliente exists with the given rut."""

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """Check if a Cliente exists with the given email."""

    @abstractmethod
    async def save(self, cliente: Cliente) -> Cliente:
        """Insert or update a Cliente and return the stored version.

        The returned Cliente carries the id assigned on first insert.
        """
