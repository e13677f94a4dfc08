"""Email value object.

Provides validated, normalized email addresses for Cliente lookup.
"""

import re
from dataclasses import dataclass

from cliente.domain.cliente.exceptions import InvalidEmailError

# Simple but effective email regex
# Validates: user@domain.tld (minimum requirements)
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


@dataclass(frozen=True)
class Email:
    """Value object representing a validated email address."""

    MIN_LENGTH = 4
    MAX_LENGTH = 255

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)

        normalized = self.value.lower().strip()

        if not self.MIN_LENGTH <= len(normalized) <= self.MAX_LENGTH:
            msg = (
                f"Email must be between {self.MIN_LENGTH} and "
                f"{self.MAX_LENGTH} characters"
            )
            raise InvalidEmailError(msg)

        if not EMAIL_PATTERN.match(normalized):
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg)

        # Replace value with normalized version (frozen dataclass workaround)
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
