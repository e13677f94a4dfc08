"""SQLAlchemy implementation of the Cliente persistence layer.

Provides:
- Base: Declarative base for all models
- RoleModel, ClienteModel, MedidorModel
- Repository implementations for the domain interfaces
- Engine/session helpers and schema initialization
"""

from cliente.infrastructure.persistence.sqlalchemy.base import Base
from cliente.infrastructure.persistence.sqlalchemy.models import (
    ClienteModel,
    MedidorModel,
    RoleModel,
)
from cliente.infrastructure.persistence.sqlalchemy.repositories import (
    ClienteRepositorySQLAlchemy,
    MedidorRepositorySQLAlchemy,
    RoleRepositorySQLAlchemy,
)
from cliente.infrastructure.persistence.sqlalchemy.session import (
    create_engine_for_url,
    create_session_maker,
    enable_sqlite_savepoints,
    session_scope,
)

__all__ = [
    "Base",
    "ClienteModel",
    "ClienteRepositorySQLAlchemy",
    "MedidorModel",
    "MedidorRepositorySQLAlchemy",
    "RoleModel",
    "RoleRepositorySQLAlchemy",
    "create_engine_for_url",
    "create_session_maker",
    "enable_sqlite_savepoints",
    "session_scope",
]
