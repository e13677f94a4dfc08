"""Plain request data for the use cases.

These carry no framework types so any request-handling layer can build
them from its own input models.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LoginRequest:
    rut: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class RegisterRequest:
    rut: str
    password: str = field(repr=False)
    firstname: str
    lastname: str
    email: str
    phone_number: str


@dataclass(frozen=True)
class UpdatePasswordRequest:
    cliente_id: int
    new_password: str = field(repr=False)


@dataclass(frozen=True)
class SearchClienteRequest:
    email: str


@dataclass(frozen=True)
class RegisterMedidorRequest:
    rut: str
    serial_number: str
    description: str | None = None
