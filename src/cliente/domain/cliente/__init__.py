"""Cliente domain manages principal identity.

This domain handles:
- Cliente aggregate (rut, credentials, profile, role)
- Role reference data
- Repository interfaces for the credential store
"""

from cliente.domain.cliente.aggregates import Cliente
from cliente.domain.cliente.exceptions import (
    InvalidClienteDataError,
    InvalidEmailError,
    StorageConflictError,
)
from cliente.domain.cliente.repositories import ClienteRepository, RoleRepository
from cliente.domain.cliente.value_objects import Email, Role, RoleName

__all__ = [
    "Cliente",
    "ClienteRepository",
    "Email",
    "InvalidClienteDataError",
    "InvalidEmailError",
    "Role",
    "RoleName",
    "RoleRepository",
    "StorageConflictError",
]
