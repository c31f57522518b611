"""User schemas for request/response models."""

from datetime import date

from pydantic import AliasChoices, ConfigDict, Field

from usergate.domain.user import UserProfile
from usergate.presentation.api.schemas.common import ApiModel


class UserResponse(ApiModel):
    """Client-facing user record. Carries no credential."""

    id: int
    username: str
    email: str
    dob: date | None = None
    phone: str | None = None
    status: int | str | None = None
    role: str

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserResponse":
        return cls(
            id=profile.id,
            username=profile.username,
            email=profile.email,
            dob=profile.dob,
            phone=profile.phone,
            status=profile.status,
            role=profile.role,
        )


class UserEnvelope(ApiModel):
    """``{success, user}`` wrapper used by every user read endpoint."""

    success: bool = True
    user: UserResponse


class CreateUserRequest(ApiModel):
    """Request schema for creating a user.

    Required fields are validated by the service so that missing values get
    the same message as blank ones.
    """

    username: str | None = None
    email: str | None = None
    password: str | None = None
    dob: date | None = None
    phone: str | None = Field(
        default=None,
        validation_alias=AliasChoices("phone", "mobile"),
    )
    role: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "email": "alice@example.com",
                "password": "secret1",
                "dob": "1990-04-01",
                "phone": "+1 555 0100",
            },
        },
    )


class CreateUserResponse(ApiModel):
    success: bool = True
    message: str = "User added successfully!"
    user_id: int


class LookupUserRequest(ApiModel):
    """Request schema for looking up a user by username."""

    username: str | None = None


class UpdatePasswordRequest(ApiModel):
    """Request schema for replacing a password.

    ``userId`` defaults to the authenticated caller.
    """

    user_id: int | str | None = None
    new_password: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"userId": 42, "newPassword": "new-secret"},
        },
    )
