"""API request/response schemas."""

from usergate.presentation.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    TokenClaimsResponse,
    VerifyTokenResponse,
)
from usergate.presentation.api.schemas.common import (
    ApiModel,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)
from usergate.presentation.api.schemas.users import (
    CreateUserRequest,
    CreateUserResponse,
    LookupUserRequest,
    UpdatePasswordRequest,
    UserEnvelope,
    UserResponse,
)

__all__ = [
    "ApiModel",
    "CreateUserRequest",
    "CreateUserResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LookupUserRequest",
    "MessageResponse",
    "TokenClaimsResponse",
    "UpdatePasswordRequest",
    "UserEnvelope",
    "UserResponse",
    "VerifyTokenResponse",
]
