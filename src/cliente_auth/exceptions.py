"""Authentication exceptions.

These exceptions are raised by the cliente_auth package and should be
caught and handled by the application layer (AuthenticationService).
ConfigurationError is the exception to that rule: it signals a broken
deployment and is allowed to propagate.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is invalid, expired, or malformed.

    ``reason`` tells the checks apart for logging. Callers outside this
    package must not expose it.
    """

    SIGNATURE = "signature"
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"
    MALFORMED = "malformed"

    def __init__(
        self,
        message: str = "Invalid or expired token",
        reason: str = MALFORMED,
    ):
        self.reason = reason
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class ConfigurationError(AuthError):
    """Raised when the auth setup is internally inconsistent.

    Examples are an unknown role name or a default role missing from the
    role table. Not recoverable by the caller.
    """

    def __init__(self, message: str = "Authentication is misconfigured"):
        super().__init__(message)
