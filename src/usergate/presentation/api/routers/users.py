"""User management router."""

import logging

from fastapi import APIRouter, status

from usergate.presentation.api.dependencies import CurrentClaims, UserServiceDep
from usergate.presentation.api.schemas.common import ErrorResponse, MessageResponse
from usergate.presentation.api.schemas.users import (
    CreateUserRequest,
    CreateUserResponse,
    LookupUserRequest,
    UpdatePasswordRequest,
    UserEnvelope,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    responses={
        201: {"description": "User created"},
        400: {"model": ErrorResponse, "description": "Invalid input"},
        409: {"model": ErrorResponse, "description": "Username or email taken"},
    },
)
async def create_user(
    user_service: UserServiceDep,
    request: CreateUserRequest | None = None,
) -> CreateUserResponse:
    request = request or CreateUserRequest()
    user_id = await user_service.register(
        username=request.username,
        email=request.email,
        password=request.password,
        dob=request.dob,
        phone=request.phone,
        role=request.role,
    )
    return CreateUserResponse(user_id=user_id)


@router.post(
    "/lookup",
    summary="Fetch a user by username",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def lookup_user(
    _claims: CurrentClaims,
    user_service: UserServiceDep,
    request: LookupUserRequest | None = None,
) -> UserEnvelope:
    request = request or LookupUserRequest()
    profile = await user_service.get_by_username(request.username)
    return UserEnvelope(user=UserResponse.from_profile(profile))


@router.get(
    "/profile",
    summary="Fetch the caller's own profile",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_profile(
    claims: CurrentClaims,
    user_service: UserServiceDep,
) -> UserEnvelope:
    profile = await user_service.get_profile(claims.user_id)
    return UserEnvelope(user=UserResponse.from_profile(profile))


@router.put(
    "/password",
    summary="Update a password",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def update_password(
    claims: CurrentClaims,
    user_service: UserServiceDep,
    request: UpdatePasswordRequest | None = None,
) -> MessageResponse:
    """
    Replace a stored password with a fresh bcrypt hash.

    ``userId`` defaults to the caller's own id.
    """
    request = request or UpdatePasswordRequest()
    target = request.user_id if request.user_id is not None else claims.user_id
    if str(target) != str(claims.user_id):
        logger.warning(
            "User %s is updating the password of user %s",
            claims.user_id,
            target,
        )
    await user_service.update_password(target, request.new_password)
    return MessageResponse(message="Password updated successfully")


@router.get(
    "/{user_id}",
    summary="Fetch a user by id",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid user ID"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def get_user(
    user_id: str,
    _claims: CurrentClaims,
    user_service: UserServiceDep,
) -> UserEnvelope:
    profile = await user_service.get_by_id(user_id)
    return UserEnvelope(user=UserResponse.from_profile(profile))
