"""Role repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional

from cliente.domain.cliente.value_objects import Role, RoleName


class RoleRepository(ABC):
    """Repository interface for seeded Role reference data."""

    @abstractmethod
    async def find_by_name(self, name: RoleName) -> Optional[Role]:
        """Find a role by its name."""

    @abstractmethod
    async def ensure_roles(self, names: Iterable[RoleName]) -> list[Role]:
        """Create any missing roles and return all requested ones."""
