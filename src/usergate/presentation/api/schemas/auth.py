"""Authentication schemas for request/response models."""

from pydantic import ConfigDict

from usergate.presentation.api.schemas.common import ApiModel
from usergate.presentation.api.schemas.users import UserResponse
from usergate_auth import TokenPayload


class LoginRequest(ApiModel):
    """Request schema for user login.

    Both fields are optional here so that a missing field is reported with
    the same message as an empty one.
    """

    username: str | None = None
    password: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "secret1",
            },
        },
    )


class LoginResponse(ApiModel):
    """Response schema for a successful login."""

    success: bool = True
    user: UserResponse
    token: str
    expires_in: str


class TokenClaimsResponse(ApiModel):
    """Identity claims of a verified token."""

    id: int
    username: str
    iat: int
    exp: int

    @classmethod
    def from_payload(cls, payload: TokenPayload) -> "TokenClaimsResponse":
        return cls(**payload.to_claims())


class VerifyTokenResponse(ApiModel):
    success: bool = True
    message: str = "Token is valid"
    user: TokenClaimsResponse
