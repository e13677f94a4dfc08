"""Auth schemas and data structures.

These are simple data classes used for transferring token data
between components.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    This represents the data extracted from a verified JWT token.

    Attributes
    ----------
    subject
        The login identifier (rut) of the Cliente
    authorities
        Authority strings granted to the subject
    issued_at
        Token issue timestamp
    expires_at
        Token expiration timestamp (exclusive)
    token_id
        Unique identifier of this issuance (``jti`` claim)
    """

    subject: str
    authorities: tuple[str, ...]
    issued_at: datetime
    expires_at: datetime
    token_id: str

    def is_expired(self, now: datetime) -> bool:
        """Check if the token has expired at ``now``."""
        return now >= self.expires_at

    def has_authority(self, authority: str) -> bool:
        return authority in self.authorities
