from cliente.infrastructure.persistence.sqlalchemy.repositories.cliente_repository import (
    ClienteRepositorySQLAlchemy,
)
from cliente.infrastructure.persistence.sqlalchemy.repositories.medidor_repository import (
    MedidorRepositorySQLAlchemy,
)
from cliente.infrastructure.persistence.sqlalchemy.repositories.role_repository import (
    RoleRepositorySQLAlchemy,
)

__all__ = [
    "ClienteRepositorySQLAlchemy",
    "MedidorRepositorySQLAlchemy",
    "RoleRepositorySQLAlchemy",
]
