"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and uniqueness violations.
"""

from usergate.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str = "Invalid email format") -> None:
        super().__init__(message, code=ErrorCode.INVALID_EMAIL)


class UsernameAlreadyExistsError(ConflictError):
    """Username already registered."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(
            "Username already exists",
            code=ErrorCode.USERNAME_TAKEN,
            details={"username": username},
        )


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email already exists",
            code=ErrorCode.EMAIL_TAKEN,
            details={"email": email},
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_ref: int | str) -> None:
        self.user_ref = user_ref
        super().__init__(
            "User not found",
            code=ErrorCode.USER_NOT_FOUND,
            details={"user": user_ref},
        )
