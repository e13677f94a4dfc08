"""Application layer: use cases, their requests and results."""

from cliente.application.requests import (
    LoginRequest,
    RegisterMedidorRequest,
    RegisterRequest,
    SearchClienteRequest,
    UpdatePasswordRequest,
)
from cliente.application.results import (
    AuthErrorCode,
    AuthFailure,
    AuthResult,
    ClienteProfile,
    ClienteResult,
    EmailCheckResult,
    MedidorListResult,
    MedidorResult,
    TokenCheckResult,
)

__all__ = [
    "AuthErrorCode",
    "AuthFailure",
    "AuthResult",
    "ClienteProfile",
    "ClienteResult",
    "EmailCheckResult",
    "LoginRequest",
    "MedidorListResult",
    "MedidorResult",
    "RegisterMedidorRequest",
    "RegisterRequest",
    "SearchClienteRequest",
    "TokenCheckResult",
    "UpdatePasswordRequest",
]
