"""bcrypt hashing for Cliente passwords.

Cliente passwords follow a deliberately short policy: anything from 4
characters up to bcrypt's 72-byte input window is accepted, so a password
such as ``secret1`` registers fine. Hashes are stored in the modular
``$2b$<cost>$...`` form and carry their own work factor.
"""

import secrets

import bcrypt

from cliente_auth.exceptions import WeakPasswordError


class PasswordHashingService:
    """Hash, verify and police Cliente passwords.

    The work factor is injected from ``PASSWORD_HASH_ROUNDS``. A hash stored
    under a different cost still verifies; ``needs_rehash`` reports it so
    the login flow can upgrade it in place.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> stored = service.hash("secret1")
    >>> service.verify("secret1", stored)
    True
    >>> service.verify("secret2", stored)
    False
    """

    MIN_LENGTH = 4
    # bcrypt only looks at the first 72 bytes of its input
    MAX_BYTES = 72

    def __init__(self, rounds: int = 12):
        """
        Parameters
        ----------
        rounds
            bcrypt cost (log2 of the key expansion rounds) used for new
            hashes. Settings restrict it to 4..31.
        """
        self._rounds = rounds
        self._dummy_hash: str | None = None

    @property
    def dummy_hash(self) -> str:
        """A hash at the configured cost that no submitted password matches.

        Verifying against it costs the same as verifying a real Cliente's
        hash, which keeps an unknown rut from answering faster.
        """
        if self._dummy_hash is None:
            unguessable = secrets.token_urlsafe(32).encode("utf-8")
            self._dummy_hash = bcrypt.hashpw(
                unguessable,
                bcrypt.gensalt(rounds=self._rounds),
            ).decode("utf-8")
        return self._dummy_hash

    def hash(self, password: str) -> str:
        """Check the policy, then hash with a fresh salt.

        Raises
        ------
        WeakPasswordError
            If the password is empty, shorter than 4 characters or longer
            than 72 bytes
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True only when ``password`` matches ``password_hash``.

        A malformed stored hash, or input bcrypt refuses, counts as a
        mismatch rather than an error.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            return False

    def validate_strength(self, password: str) -> None:
        """Enforce the Cliente password policy.

        Length is counted in characters for the lower bound and in UTF-8
        bytes for the upper one, since bcrypt would silently ignore
        anything past byte 72.

        Raises
        ------
        WeakPasswordError
            With a message naming the violated bound
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """True when the stored cost differs from the configured one.

        Anything that does not parse as ``$2b$<cost>$...`` also needs a
        rehash.
        """
        parts = password_hash.split("$")
        if len(parts) < 3:
            return True
        try:
            return int(parts[2]) != self._rounds
        except ValueError:
            return True
