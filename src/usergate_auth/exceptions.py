"""Authentication exceptions.

These exceptions are raised by the usergate_auth package and by the login
flow, and are rendered to HTTP responses by the API exception handlers.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidCredentialsError(AuthError):
    """Raised when username or password is incorrect during login.

    Unknown usernames and wrong passwords share this error and message.
    """

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class AccountInactiveError(AuthError):
    """Raised when a known user with valid credentials is not active."""

    def __init__(self, message: str = "Account is inactive"):
        super().__init__(message)


class MissingTokenError(AuthError):
    """Raised when a protected endpoint receives no bearer token."""

    def __init__(self, message: str = "Access token required"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is malformed, tampered or not ours."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenExpiredError(AuthError):
    """Raised when an otherwise valid JWT token has expired."""

    def __init__(self, message: str = "Token expired. Please login again."):
        super().__init__(message)


class TokenSigningError(AuthError):
    """Raised when a token cannot be signed (server-side fault)."""

    def __init__(self, message: str = "Token could not be issued"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)
