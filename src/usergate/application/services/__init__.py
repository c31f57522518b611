"""Application layer services."""

from usergate.application.services.authentication_service import (
    AuthenticationService,
    LoginResult,
)
from usergate.application.services.password_migration_service import (
    PasswordMigrationReport,
    PasswordMigrationService,
)
from usergate.application.services.user_service import UserService

__all__ = [
    "AuthenticationService",
    "LoginResult",
    "PasswordMigrationReport",
    "PasswordMigrationService",
    "UserService",
]
