"""Medidor entity: a metering device registered to a Cliente."""

from dataclasses import dataclass, field
from datetime import datetime

from cliente.domain.medidor.exceptions import InvalidMedidorDataError
from cliente.domain.shared.time import utc_now

SERIAL_NUMBER_LENGTH = (4, 50)
DESCRIPTION_MAX_LENGTH = 255


@dataclass
class Medidor:
    serial_number: str
    cliente_id: int
    description: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        serial = (self.serial_number or "").strip()
        min_length, max_length = SERIAL_NUMBER_LENGTH
        if not min_length <= len(serial) <= max_length:
            msg = (
                f"serial_number must be between {min_length} and "
                f"{max_length} characters"
            )
            raise InvalidMedidorDataError("serial_number", msg)
        self.serial_number = serial

        if self.cliente_id is None:
            raise InvalidMedidorDataError("cliente_id", "cliente_id is required")

        if self.description is not None:
            self.description = self.description.strip() or None
        if self.description and len(self.description) > DESCRIPTION_MAX_LENGTH:
            msg = f"description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
            raise InvalidMedidorDataError("description", msg)

    @classmethod
    def create(
        cls,
        serial_number: str,
        cliente_id: int,
        description: str | None = None,
    ) -> "Medidor":
        return cls(
            serial_number=serial_number,
            cliente_id=cliente_id,
            description=description,
        )
