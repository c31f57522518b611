"""Auth schemas and data structures.

These are simple data classes used for transferring authentication
data between components.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    This represents the identity claims extracted from a verified token.

    Attributes
    ----------
    user_id
        The stable integer id of the user
    username
        The user's username at the time the token was issued
    issued_at
        Token issue timestamp
    exp
        Token expiration timestamp
    """

    user_id: int
    username: str
    issued_at: datetime
    exp: datetime

    def to_claims(self) -> dict:
        """Claims as exposed to API clients."""
        return {
            "id": self.user_id,
            "username": self.username,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.exp.timestamp()),
        }
