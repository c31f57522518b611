"""Unit tests for AuthenticationService."""

from datetime import date
from unittest.mock import AsyncMock, Mock, patch

import pytest

from usergate.application.services import AuthenticationService, LoginResult
from usergate.domain.shared import PersistenceError, ValidationError
from usergate.domain.user import User, UserProfile
from usergate_auth import (
    AccountInactiveError,
    InvalidCredentialsError,
    JWTService,
    PasswordHashingService,
    TokenExpiredError,
    TokenSigningError,
)

TEST_USER_ID = 7
TEST_USERNAME = "alice"
TEST_PASSWORD = "secret1"

# Real hashing at the lowest work factor keeps these tests fast
HASHER = PasswordHashingService(rounds=4)
HASHED_PASSWORD = HASHER.hash(TEST_PASSWORD)


def _make_user(password_credential: str = HASHED_PASSWORD, status=None) -> User:
    return User.reconstitute(
        id=TEST_USER_ID,
        username=TEST_USERNAME,
        email="alice@x.com",
        password_credential=password_credential,
        status=status,
        dob=date(1990, 4, 1),
        phone=None,
        role="user",
    )


class TestAuthenticationServiceLogin:
    """Tests for the login flow."""

    def setup_method(self):
        """Set up test fixtures."""
        self.user_repo = AsyncMock()
        self.jwt_service = JWTService(secret_key="test-secret", expires_in="2h")

        self.service = AuthenticationService(
            user_repository=self.user_repo,
            password_service=HASHER,
            jwt_service=self.jwt_service,
        )

    @pytest.mark.asyncio
    async def test_login_returns_safe_user_and_token(self):
        # Arrange
        self.user_repo.find_by_username.return_value = _make_user()

        # Act
        result = await self.service.login(TEST_USERNAME, TEST_PASSWORD)

        # Assert
        assert isinstance(result, LoginResult)
        assert isinstance(result.user, UserProfile)
        assert result.user.id == TEST_USER_ID
        assert result.expires_in == "2h"

        payload = self.jwt_service.verify_token(result.token)
        assert payload.user_id == TEST_USER_ID
        assert payload.username == TEST_USERNAME
        assert (payload.exp - payload.issued_at).total_seconds() == 2 * 3600

    @pytest.mark.asyncio
    async def test_login_strips_username(self):
        self.user_repo.find_by_username.return_value = _make_user()

        await self.service.login(f"  {TEST_USERNAME} ", TEST_PASSWORD)

        self.user_repo.find_by_username.assert_awaited_once_with(TEST_USERNAME)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("username", "password"),
        [(None, TEST_PASSWORD), ("", TEST_PASSWORD), ("   ", TEST_PASSWORD),
         (TEST_USERNAME, None), (TEST_USERNAME, ""), (TEST_USERNAME, "  ")],
    )
    async def test_login_requires_username_and_password(self, username, password):
        with pytest.raises(ValidationError, match="Username and password are required"):
            await self.service.login(username, password)

        self.user_repo.find_by_username.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_user_and_wrong_password_look_the_same(self):
        # Arrange
        self.user_repo.find_by_username.return_value = None
        with pytest.raises(InvalidCredentialsError) as unknown:
            await self.service.login("nobody", TEST_PASSWORD)

        self.user_repo.find_by_username.return_value = _make_user()
        with pytest.raises(InvalidCredentialsError) as wrong:
            await self.service.login(TEST_USERNAME, "wrong-password")

        # Assert
        assert unknown.value.message == wrong.value.message
        assert wrong.value.message == "Invalid username or password"

    @pytest.mark.asyncio
    async def test_unknown_user_still_pays_for_a_bcrypt_check(self):
        self.user_repo.find_by_username.return_value = None

        with patch.object(HASHER, "verify_dummy", wraps=HASHER.verify_dummy) as dummy:
            with pytest.raises(InvalidCredentialsError):
                await self.service.login("nobody", TEST_PASSWORD)

        dummy.assert_called_once_with(TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_known_user_skips_the_dummy_check(self):
        self.user_repo.find_by_username.return_value = _make_user()

        with patch.object(HASHER, "verify_dummy") as dummy:
            with pytest.raises(InvalidCredentialsError):
                await self.service.login(TEST_USERNAME, "wrong-password")

        dummy.assert_not_called()

    @pytest.mark.asyncio
    async def test_legacy_plaintext_credential_logs_in(self):
        self.user_repo.find_by_username.return_value = _make_user(
            password_credential=" legacy-pass ",
        )

        result = await self.service.login(TEST_USERNAME, "legacy-pass")

        assert result.user.username == TEST_USERNAME

    @pytest.mark.asyncio
    async def test_legacy_plaintext_mismatch_is_rejected(self):
        self.user_repo.find_by_username.return_value = _make_user(
            password_credential="legacy-pass",
        )

        with pytest.raises(InvalidCredentialsError):
            await self.service.login(TEST_USERNAME, "legacy-pas")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [None, 1, "1", "active", "Active", "ACTIVE"])
    async def test_active_statuses_log_in(self, status):
        self.user_repo.find_by_username.return_value = _make_user(status=status)

        result = await self.service.login(TEST_USERNAME, TEST_PASSWORD)

        assert result.token

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [0, "0", "inactive", "suspended"])
    async def test_inactive_statuses_are_refused(self, status):
        self.user_repo.find_by_username.return_value = _make_user(status=status)

        with pytest.raises(AccountInactiveError, match="Account is inactive"):
            await self.service.login(TEST_USERNAME, TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_inactive_user_with_wrong_password_gets_invalid_credentials(self):
        self.user_repo.find_by_username.return_value = _make_user(status="inactive")

        with pytest.raises(InvalidCredentialsError):
            await self.service.login(TEST_USERNAME, "wrong-password")

    @pytest.mark.asyncio
    async def test_store_fault_propagates(self):
        self.user_repo.find_by_username.side_effect = PersistenceError(
            "find_by_username",
        )

        with pytest.raises(PersistenceError):
            await self.service.login(TEST_USERNAME, TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_signing_fault_propagates(self):
        jwt_service = Mock(spec=JWTService)
        jwt_service.create_access_token.side_effect = TokenSigningError
        service = AuthenticationService(
            user_repository=self.user_repo,
            password_service=HASHER,
            jwt_service=jwt_service,
        )
        self.user_repo.find_by_username.return_value = _make_user()

        with pytest.raises(TokenSigningError):
            await service.login(TEST_USERNAME, TEST_PASSWORD)


class TestAuthenticationServiceVerifyToken:
    def setup_method(self):
        self.jwt_service = Mock(spec=JWTService)
        self.service = AuthenticationService(
            user_repository=AsyncMock(),
            password_service=HASHER,
            jwt_service=self.jwt_service,
        )

    def test_verify_token_delegates(self):
        self.jwt_service.verify_token.return_value = "payload"

        assert self.service.verify_token("abc") == "payload"
        self.jwt_service.verify_token.assert_called_once_with("abc")

    def test_verify_token_propagates_expiry(self):
        self.jwt_service.verify_token.side_effect = TokenExpiredError

        with pytest.raises(TokenExpiredError):
            self.service.verify_token("abc")
