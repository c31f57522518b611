"""Common schemas shared across API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model for wire schemas.

    Fields are camelCase on the wire; snake_case is accepted on input too.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(ApiModel):
    """Standard error response schema."""

    success: bool = False
    message: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code for programmatic handling")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Diagnostic context, only in development",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "User not found",
                "code": "USER_NOT_FOUND",
            },
        },
    )


class MessageResponse(ApiModel):
    """Acknowledgement without payload."""

    success: bool = True
    message: str


class HealthResponse(ApiModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    environment: str = Field(..., description="Deployment environment")
