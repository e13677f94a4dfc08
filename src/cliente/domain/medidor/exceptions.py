"""Medidor domain exceptions."""


class InvalidMedidorDataError(ValueError):
    """Raised when a Medidor field violates its constraints."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)
