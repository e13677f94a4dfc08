"""Application services."""

from cliente.application.services.authentication_service import AuthenticationService
from cliente.application.services.cliente_service import ClienteService

__all__ = ["AuthenticationService", "ClienteService"]
