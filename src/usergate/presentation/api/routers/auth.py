"""Authentication router for login, token verification and logout."""

from fastapi import APIRouter

from usergate.presentation.api.dependencies import AuthService, CurrentClaims
from usergate.presentation.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    TokenClaimsResponse,
    VerifyTokenResponse,
)
from usergate.presentation.api.schemas.common import ErrorResponse, MessageResponse
from usergate.presentation.api.schemas.users import UserResponse

router = APIRouter()


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        400: {"model": ErrorResponse, "description": "Missing username or password"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "Account is inactive"},
    },
)
async def login(
    auth_service: AuthService,
    request: LoginRequest | None = None,
) -> LoginResponse:
    """
    Authenticate with username and password.

    Returns the user record (without credential), a bearer token and the
    configured token lifetime.
    """
    request = request or LoginRequest()
    result = await auth_service.login(request.username, request.password)
    return LoginResponse(
        user=UserResponse.from_profile(result.user),
        token=result.token,
        expires_in=result.expires_in,
    )


@router.post(
    "/verify-token",
    summary="Verify bearer token",
    responses={
        401: {"model": ErrorResponse, "description": "Missing or expired token"},
        403: {"model": ErrorResponse, "description": "Invalid token"},
    },
)
async def verify_token(claims: CurrentClaims) -> VerifyTokenResponse:
    """Echo the verified identity claims of the bearer token."""
    return VerifyTokenResponse(user=TokenClaimsResponse.from_payload(claims))


@router.post("/logout", summary="Log out")
async def logout() -> MessageResponse:
    """
    Acknowledge a logout.

    Tokens are stateless; the client discards its token.
    """
    return MessageResponse(message="Logged out successfully")
