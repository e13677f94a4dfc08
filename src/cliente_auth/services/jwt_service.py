"""JWT token service.

Provides JWT token issuance and verification for authentication.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from cliente_auth.exceptions import InvalidTokenError
from cliente_auth.schemas import TokenPayload

logger = logging.getLogger(__name__)


class JWTService:
    """Service for JWT token issuance and verification.

    Tokens are short-lived, stateless access tokens. Each one binds a
    subject (the Cliente's rut) to the authorities resolved from its role
    and is valid in the half-open window ``[issued_at, expires_at)``.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.issue("12345678-9", ["USER"])
    >>> payload = service.verify_token(token)
    >>> print(payload.subject)
    """

    DEFAULT_ACCESS_EXPIRE_MINUTES = 15
    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("sub", "authorities", "iat", "exp", "jti")

    def __init__(
        self,
        secret_key: str,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_minutes
            Minutes until an issued token expires (default 15)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)
        if access_token_expire_minutes <= 0:
            msg = "Token lifetime must be positive"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._ttl = timedelta(minutes=access_token_expire_minutes)

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(
        self,
        subject: str,
        authorities: Iterable[str],
        now: datetime | None = None,
    ) -> str:
        """Issue a signed token for ``subject``.

        Parameters
        ----------
        subject
            The Cliente's login identifier (rut)
        authorities
            Authority strings to embed in the token
        now
            Issue instant; defaults to the current UTC time

        Returns
        -------
        The encoded JWT token string
        """
        issued_at = _as_utc(now) if now is not None else datetime.now(tz=timezone.utc)
        expires_at = issued_at + self._ttl

        payload = {
            "sub": subject,
            "authorities": list(authorities),
            # Fractional NumericDates keep the window exact below one second
            "iat": issued_at.timestamp(),
            "exp": expires_at.timestamp(),
            "jti": uuid4().hex,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str, now: datetime | None = None) -> TokenPayload:
        """Verify and decode a JWT token.

        Parameters
        ----------
        token
            The JWT token string to verify
        now
            Instant to check the validity window against; defaults to the
            current UTC time

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        InvalidTokenError
            If the signature does not verify, ``now`` is outside the
            validity window, or the claims are malformed
        """
        check_at = _as_utc(now) if now is not None else datetime.now(tz=timezone.utc)

        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={
                    # The window is checked below against the injected clock
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": list(self.REQUIRED_CLAIMS),
                },
            )
        except jwt.InvalidSignatureError as e:
            raise InvalidTokenError(
                "Token signature does not verify",
                reason=InvalidTokenError.SIGNATURE,
            ) from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(
                f"Invalid token: {e}",
                reason=InvalidTokenError.MALFORMED,
            ) from e

        payload = self._to_payload(claims)

        if check_at < payload.issued_at:
            raise InvalidTokenError(
                "Token is not yet valid",
                reason=InvalidTokenError.NOT_YET_VALID,
            )
        if payload.is_expired(check_at):
            raise InvalidTokenError(
                "Token has expired",
                reason=InvalidTokenError.EXPIRED,
            )

        return payload

    def validate(self, token: str, now: datetime | None = None) -> TokenPayload | None:
        """Return the token payload, or None if the token is not valid.

        All failure causes collapse to None; the cause is only logged.
        """
        try:
            return self.verify_token(token, now=now)
        except InvalidTokenError as e:
            logger.debug("Token rejected (%s): %s", e.reason, e.message)
            return None

    def _to_payload(self, claims: dict) -> TokenPayload:
        try:
            subject = claims["sub"]
            authorities = claims["authorities"]
            if not isinstance(subject, str) or not subject:
                msg = "sub must be a non-empty string"
                raise ValueError(msg)
            if not isinstance(authorities, list) or not all(
                isinstance(a, str) for a in authorities
            ):
                msg = "authorities must be a list of strings"
                raise ValueError(msg)

            return TokenPayload(
                subject=subject,
                authorities=tuple(authorities),
                issued_at=datetime.fromtimestamp(
                    float(claims["iat"]),
                    tz=timezone.utc,
                ),
                expires_at=datetime.fromtimestamp(
                    float(claims["exp"]),
                    tz=timezone.utc,
                ),
                token_id=str(claims["jti"]),
            )
        except (KeyError, TypeError, ValueError, OverflowError, OSError) as e:
            raise InvalidTokenError(
                f"Malformed token payload: {e}",
                reason=InvalidTokenError.MALFORMED,
            ) from e


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)
