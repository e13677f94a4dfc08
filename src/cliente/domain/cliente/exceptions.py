"""Cliente domain exceptions.

Custom exceptions for the Cliente domain, used for validation
and persistence rule violations.
"""


class InvalidEmailError(ValueError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidClienteDataError(ValueError):
    """Raised when a Cliente field violates its constraints."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class StorageConflictError(Exception):
    """A write was rejected by a uniqueness constraint.

    Raised when a concurrent writer stored the same unique value between
    the existence pre-check and the insert.
    """

    def __init__(self, entity: str, detail: str = "") -> None:
        self.entity = entity
        self.detail = detail
        super().__init__(f"Uniqueness conflict while saving {entity}")
