"""Medidor domain: metering devices tied to a Cliente."""

from cliente.domain.medidor.exceptions import InvalidMedidorDataError
from cliente.domain.medidor.medidor import Medidor
from cliente.domain.medidor.repository import MedidorRepository

__all__ = ["InvalidMedidorDataError", "Medidor", "MedidorRepository"]
