from cliente.domain.cliente.repositories.cliente_repository import ClienteRepository
from cliente.domain.cliente.repositories.role_repository import RoleRepository

__all__ = ["ClienteRepository", "RoleRepository"]
