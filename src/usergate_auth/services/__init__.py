"""Authentication services.

Provides password hashing and JWT token management.
"""

from usergate_auth.services.jwt_service import JWTService, parse_duration
from usergate_auth.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "PasswordHashingService",
    "parse_duration",
]
