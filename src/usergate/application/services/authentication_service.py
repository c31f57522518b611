"""Authentication service for login and token verification."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from usergate.domain.shared import ValidationError
from usergate.domain.user import UserProfile
from usergate_auth import (
    AccountInactiveError,
    InvalidCredentialsError,
    JWTService,
    PasswordHashingService,
    TokenPayload,
    parse_credential,
    verify_credential,
)

if TYPE_CHECKING:
    from usergate.domain.user import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login."""

    user: UserProfile
    token: str
    expires_in: str


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates usergate_auth (credential verification, JWT tokens) with
    the user store. A login runs these steps in order and stops at the
    first failure:

    1. both username and password are present
    2. the user exists
    3. the password matches the stored credential
    4. the account status is active (or unset)
    5. a token is issued for ``{id, username}``

    Unknown usernames and wrong passwords raise the same
    InvalidCredentialsError.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._jwt_service = jwt_service

    async def login(self, username: str | None, password: str | None) -> LoginResult:
        username = (username or "").strip()
        if not username or not password or not password.strip():
            msg = "Username and password are required"
            raise ValidationError(msg)

        user = await self._user_repo.find_by_username(username)
        if user is None:
            await asyncio.to_thread(self._password_service.verify_dummy, password)
            logger.info("Failed login for unknown user: %s", username)
            raise InvalidCredentialsError

        # bcrypt is CPU-bound; the repository has already released its connection
        stored = parse_credential(user.password_credential)
        matched = await asyncio.to_thread(
            verify_credential,
            password,
            stored,
            self._password_service,
        )
        if not matched:
            logger.info("Failed login for user: %s", username)
            raise InvalidCredentialsError

        if not user.is_active:
            logger.info("Login refused for inactive user: %s", username)
            raise AccountInactiveError

        token = self._jwt_service.create_access_token(
            user_id=user.id,
            username=user.username,
        )

        logger.info("User logged in: %s", user.username)
        return LoginResult(
            user=user.profile(),
            token=token,
            expires_in=self._jwt_service.expires_in,
        )

    def verify_token(self, token: str) -> TokenPayload:
        return self._jwt_service.verify_token(token)
