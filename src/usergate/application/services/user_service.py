"""User management use cases."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import TYPE_CHECKING

from usergate.domain.shared import ValidationError
from usergate.domain.user import (
    DEFAULT_ROLE,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_ROLE_LENGTH,
    Email,
    UserNotFoundError,
    UserProfile,
    parse_user_id,
)
from usergate_auth import PasswordHashingService

if TYPE_CHECKING:
    from usergate.domain.user import UserRepository

logger = logging.getLogger(__name__)


def _sanitize(value: str | None) -> str:
    return (value or "").strip()[:MAX_NAME_LENGTH]


def _optional(value: str | None, field: str, max_length: int) -> str | None:
    value = (value or "").strip()
    if len(value) > max_length:
        msg = f"{field} must be at most {max_length} characters"
        raise ValidationError(msg)
    return value or None


class UserService:
    """Registration, lookup and password update for user records.

    Passwords are always hashed before they reach the repository.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service

    async def register(
        self,
        username: str | None,
        email: str | None,
        password: str | None,
        dob: date | None = None,
        phone: str | None = None,
        role: str | None = None,
    ) -> int:
        """Create a user and return the new id.

        Raises
        ------
        ValidationError
            If a required field is missing, the email is malformed, or the
            phone or role is longer than its column
        WeakPasswordError
            If the password is too short or too long
        UsernameAlreadyExistsError, EmailAlreadyExistsError
            If the username or email is taken
        """
        if not username or not email or not password:
            msg = "Username, email, and password are required"
            raise ValidationError(msg)

        clean_username = _sanitize(username)
        if not clean_username:
            msg = "Username cannot be empty"
            raise ValidationError(msg)

        clean_email = Email(_sanitize(email))
        phone = _optional(phone, "Phone", MAX_PHONE_LENGTH)
        role = _optional(role, "Role", MAX_ROLE_LENGTH) or DEFAULT_ROLE
        self._password_service.validate_strength(password)
        password_hash = await asyncio.to_thread(self._password_service.hash, password)

        user_id = await self._user_repo.insert(
            username=clean_username,
            email=clean_email.value,
            password_credential=password_hash,
            dob=dob,
            phone=phone,
            role=role,
        )
        logger.info("User added: %s (id: %s)", clean_username, user_id)
        return user_id

    async def get_by_username(self, username: str | None) -> UserProfile:
        if not username or not username.strip():
            msg = "Username is required"
            raise ValidationError(msg)

        user = await self._user_repo.find_by_username(username)
        if user is None:
            raise UserNotFoundError(username.strip())
        return user.profile()

    async def get_by_id(self, user_id: int | str) -> UserProfile:
        user_id = parse_user_id(user_id)
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user.profile()

    async def get_profile(self, user_id: int) -> UserProfile:
        """Profile of the authenticated caller, identified by token claims."""
        return await self.get_by_id(user_id)

    async def update_password(self, user_id: int | str | None, new_password: str | None):
        """Hash ``new_password`` and store it for ``user_id``.

        Raises
        ------
        ValidationError
            If either argument is missing or the id is invalid
        WeakPasswordError
            If the new password is too short or too long
        UserNotFoundError
            If no row was updated
        """
        if user_id is None or user_id == "" or not new_password:
            msg = "User ID and new password are required"
            raise ValidationError(msg)

        user_id = parse_user_id(user_id)
        self._password_service.validate_strength(new_password)
        password_hash = await asyncio.to_thread(
            self._password_service.hash,
            new_password,
        )

        updated = await self._user_repo.update_credential(user_id, password_hash)
        if updated == 0:
            raise UserNotFoundError(user_id)

        logger.info("Password updated for user id: %s", user_id)
