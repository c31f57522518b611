"""Password hashing service using bcrypt.

Provides secure password hashing and verification with configurable
strength validation.
"""

import logging
from functools import lru_cache

import bcrypt

from usergate_auth.exceptions import WeakPasswordError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")

_DUMMY_PASSWORD = b"usergate-dummy-password"


def _password_bytes(password: str) -> bytes:
    data = password.encode("utf-8")
    if len(data) > BCRYPT_MAX_BYTES:
        data = data[:BCRYPT_MAX_BYTES]
    return data


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(_DUMMY_PASSWORD, bcrypt.gensalt(rounds=rounds))


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.
    Also provides password strength validation.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> hash = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    # Password requirements
    MIN_LENGTH = 6
    MAX_LENGTH = 128

    def __init__(
        self,
        rounds: int = 10,
        min_length: int = MIN_LENGTH,
        max_length: int = MAX_LENGTH,
    ):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 10.
            Higher values are more secure but slower.
        min_length
            Minimum accepted password length in characters
        max_length
            Maximum accepted password length in characters
        """
        self._rounds = rounds
        self._min_length = min_length
        self._max_length = max_length

    @staticmethod
    def is_hashed(value: str | None) -> bool:
        """Return True if ``value`` looks like a bcrypt hash."""
        return bool(value) and value.startswith(BCRYPT_PREFIXES)

    def hash(self, password: str, validate: bool = True) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash
        validate
            Check strength first. Disabled only when rehashing stored
            legacy passwords that predate the rules.

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if validate:
            self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(_password_bytes(password), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt hash to verify against

        Returns
        -------
        True if password matches, False otherwise
        """
        if not password or not password_hash:
            return False
        try:
            return bcrypt.checkpw(
                _password_bytes(password),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            logger.debug("Stored hash could not be parsed by bcrypt")
            return False

    def verify_dummy(self, password: str | None) -> bool:
        """Run one bcrypt check at the configured work factor and return False.

        Stands in for ``verify`` on logins whose username matches no user.
        """
        bcrypt.checkpw(_password_bytes(password or ""), _dummy_hash(self._rounds))
        return False

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets strength requirements.

        Parameters
        ----------
        password
            The password to validate

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self._min_length:
            msg = f"Password must be at least {self._min_length} characters long"
            raise WeakPasswordError(msg)

        if len(password) > self._max_length:
            msg = f"Password must be less than {self._max_length} characters"
            raise WeakPasswordError(msg)

