"""
Result types for the authentication and Cliente use cases.

Every user-triggered failure is reported through ``error``; use cases
never raise for them. Only ConfigurationError escapes.
"""

from dataclasses import dataclass
from enum import Enum

from cliente.domain.cliente import Cliente
from cliente.domain.medidor import Medidor
from cliente_auth import TokenPayload


class AuthErrorCode(str, Enum):
    """Stable failure codes for callers of the use cases."""

    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    DUPLICATE_LOGIN_ID = "DUPLICATE_LOGIN_ID"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    PRINCIPAL_NOT_FOUND = "PRINCIPAL_NOT_FOUND"
    INVALID_TOKEN = "INVALID_TOKEN"
    STORAGE_CONFLICT = "STORAGE_CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    DUPLICATE_MEDIDOR = "DUPLICATE_MEDIDOR"


@dataclass(frozen=True)
class AuthFailure:
    code: AuthErrorCode
    message: str


@dataclass(frozen=True)
class AuthResult:
    """Outcome of login, register and update_password."""

    token: str | None = None
    message: str | None = None
    error: AuthFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, token: str | None = None, message: str | None = None) -> "AuthResult":
        return cls(token=token, message=message)

    @classmethod
    def failure(cls, code: AuthErrorCode, message: str) -> "AuthResult":
        return cls(error=AuthFailure(code=code, message=message))


@dataclass(frozen=True)
class EmailCheckResult:
    exists: bool
    message: str
    error: AuthFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class TokenCheckResult:
    payload: TokenPayload | None = None
    error: AuthFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ClienteProfile:
    """Public view of a Cliente (no credentials)."""

    id: int
    rut: str
    firstname: str
    lastname: str
    email: str
    phone_number: str
    role: str

    @classmethod
    def from_cliente(cls, cliente: Cliente) -> "ClienteProfile":
        return cls(
            id=cliente.id,
            rut=cliente.rut,
            firstname=cliente.firstname,
            lastname=cliente.lastname,
            email=cliente.email,
            phone_number=cliente.phone_number,
            role=cliente.role.name.value,
        )


@dataclass(frozen=True)
class ClienteResult:
    cliente: ClienteProfile | None = None
    error: AuthFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class MedidorResult:
    medidor: Medidor | None = None
    message: str | None = None
    error: AuthFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class MedidorListResult:
    medidores: tuple[Medidor, ...] = ()
    error: AuthFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
