"""UserGate Auth - Generic authentication infrastructure.

This package provides authentication building blocks that know nothing
about HTTP or the database:
- Password hashing (bcrypt) and strength validation
- Stored credential classification (bcrypt hash vs legacy plaintext)
- JWT token creation and verification

Architecture:
    usergate_auth/
    ├── services/           # Password hashing, JWT
    ├── credentials.py      # Stored credential variants
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from usergate_auth import JWTService, PasswordHashingService
"""

from usergate_auth.credentials import (
    HashedCredential,
    LegacyPlaintextCredential,
    StoredCredential,
    parse_credential,
    verify_credential,
)
from usergate_auth.exceptions import (
    AccountInactiveError,
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    TokenExpiredError,
    TokenSigningError,
    WeakPasswordError,
)
from usergate_auth.schemas import TokenPayload
from usergate_auth.services import JWTService, PasswordHashingService, parse_duration

__all__ = [
    # Services
    "JWTService",
    "PasswordHashingService",
    "parse_duration",
    # Credentials
    "HashedCredential",
    "LegacyPlaintextCredential",
    "StoredCredential",
    "parse_credential",
    "verify_credential",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AccountInactiveError",
    "AuthError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
    "TokenExpiredError",
    "TokenSigningError",
    "WeakPasswordError",
]
