"""User domain: the user record, its value objects and repository port."""

from usergate.domain.user.aggregates import (
    DEFAULT_ROLE,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_ROLE_LENGTH,
    User,
    UserProfile,
)
from usergate.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    UsernameAlreadyExistsError,
    UserNotFoundError,
)
from usergate.domain.user.repositories import UserRepository
from usergate.domain.user.value_objects import Email, is_active_status, parse_user_id

__all__ = [
    "DEFAULT_ROLE",
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "MAX_NAME_LENGTH",
    "MAX_PHONE_LENGTH",
    "MAX_ROLE_LENGTH",
    "User",
    "UserNotFoundError",
    "UserProfile",
    "UserRepository",
    "UsernameAlreadyExistsError",
    "is_active_status",
    "parse_user_id",
]
