from usergate.domain.user.aggregates.user import (
    DEFAULT_ROLE,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_ROLE_LENGTH,
    User,
    UserProfile,
)

__all__ = [
    "DEFAULT_ROLE",
    "MAX_NAME_LENGTH",
    "MAX_PHONE_LENGTH",
    "MAX_ROLE_LENGTH",
    "User",
    "UserProfile",
]
