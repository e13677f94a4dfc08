"""Cliente Auth - generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of the Cliente domain. It handles:
- Password hashing (bcrypt)
- JWT token issuance and verification
- Role to authority resolution

Architecture:
    cliente_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── roles.py            # Role directory
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from cliente_auth import JWTService, PasswordHashingService, resolve_authorities

    token = JWTService(secret_key).issue(rut, resolve_authorities(role))
"""

from cliente_auth.exceptions import (
    AuthError,
    ConfigurationError,
    InvalidTokenError,
    WeakPasswordError,
)
from cliente_auth.roles import RoleName, resolve_authorities, resolve_authority
from cliente_auth.schemas import TokenPayload
from cliente_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Roles
    "RoleName",
    "resolve_authority",
    "resolve_authorities",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "ConfigurationError",
    "InvalidTokenError",
    "WeakPasswordError",
]
