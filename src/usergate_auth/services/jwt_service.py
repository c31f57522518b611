"""JWT token service.

Provides JWT token creation and verification for authentication.
"""

import re
from datetime import datetime, timedelta, timezone

import jwt

from usergate_auth.exceptions import (
    InvalidTokenError,
    TokenExpiredError,
    TokenSigningError,
)
from usergate_auth.schemas import TokenPayload

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_duration(value: str | int | timedelta) -> timedelta:
    """Parse an expiry such as ``"24h"``, ``"30m"``, ``"7d"`` or ``3600``.

    Bare numbers are seconds.

    Raises
    ------
    ValueError
        If the value is not a positive duration
    """
    if isinstance(value, timedelta):
        delta = value
    elif isinstance(value, int):
        delta = timedelta(seconds=value)
    else:
        match = _DURATION_PATTERN.match(value or "")
        if match is None:
            msg = f"Invalid duration: {value!r}"
            raise ValueError(msg)
        amount, unit = match.groups()
        delta = timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})

    if delta <= timedelta(0):
        msg = f"Duration must be positive: {value!r}"
        raise ValueError(msg)
    return delta


class JWTService:
    """Service for JWT access token creation and verification.

    Secret, issuer, audience and expiry are fixed for the lifetime of the
    instance.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token(42, "alice")
    >>> payload = service.verify_token(token)
    >>> print(payload.user_id)
    42
    """

    DEFAULT_EXPIRES_IN = "24h"
    DEFAULT_ISSUER = "usergate"
    DEFAULT_AUDIENCE = "usergate-users"
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        issuer: str = DEFAULT_ISSUER,
        audience: str = DEFAULT_AUDIENCE,
        expires_in: str | int | timedelta = DEFAULT_EXPIRES_IN,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        issuer
            Value of the ``iss`` claim, checked on verification
        audience
            Value of the ``aud`` claim, checked on verification
        expires_in
            Token lifetime (default "24h")
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._issuer = issuer
        self._audience = audience
        self._expire = parse_duration(expires_in)
        self._expires_in_label = (
            expires_in
            if isinstance(expires_in, str)
            else f"{int(self._expire.total_seconds())}s"
        )

    @property
    def expires_in(self) -> str:
        """Configured token lifetime as reported to clients."""
        return self._expires_in_label

    @property
    def expire_delta(self) -> timedelta:
        return self._expire

    def create_access_token(
        self,
        user_id: int,
        username: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed access token.

        Parameters
        ----------
        user_id
            The user's stable integer id
        username
            The user's username
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string

        Raises
        ------
        TokenSigningError
            If the token cannot be encoded
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self._expire)

        payload = {
            "sub": str(user_id),
            "username": username,
            "iat": now,
            "exp": expire,
            "iss": self._issuer,
            "aud": self._audience,
        }

        try:
            return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise TokenSigningError from e

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a JWT token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the identity claims

        Raises
        ------
        TokenExpiredError
            If the token is well-formed but past its expiry
        InvalidTokenError
            If the signature, issuer, audience or payload is wrong
        """
        if not token:
            raise InvalidTokenError

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self._issuer,
                audience=self._audience,
                options={"require": ["exp", "iat", "sub"]},
            )

            return TokenPayload(
                user_id=int(payload["sub"]),
                username=str(payload["username"]),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )

        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e
