"""FastAPI dependency injection for the UserGate API.

Provides dependencies for:
- The shared engine and session maker
- Repository and service instances
- Authentication (verified token claims)
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from usergate.application.services import AuthenticationService, UserService
from usergate.domain.user import UserRepository
from usergate.infrastructure.persistence.sqlalchemy.engine import (
    build_engine_from_settings,
)
from usergate.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from usergate.presentation.api.config import get_api_settings
from usergate_auth import (
    InvalidTokenError,
    JWTService,
    MissingTokenError,
    PasswordHashingService,
    TokenExpiredError,
    TokenPayload,
)
from usergate_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Engine & Session Maker (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine owns the bounded connection pool shared by all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return build_engine_from_settings(get_settings())


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


def get_user_repository(
    session_maker: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
) -> UserRepository:
    return UserRepositorySQLAlchemy(session_maker)


UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        expires_in=settings.jwt_expires_in,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(
        rounds=settings.bcrypt_rounds,
        min_length=settings.password_min_length,
        max_length=settings.password_max_length,
    )


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]


def get_authentication_service(
    user_repository: UserRepositoryDep,
    password_service: PasswordServiceDep,
    jwt_service: JWTServiceDep,
) -> AuthenticationService:
    return AuthenticationService(
        user_repository=user_repository,
        password_service=password_service,
        jwt_service=jwt_service,
    )


def get_user_service(
    user_repository: UserRepositoryDep,
    password_service: PasswordServiceDep,
) -> UserService:
    return UserService(
        user_repository=user_repository,
        password_service=password_service,
    )


AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]


# -----------------------------------------------------------------------------
# Current Caller (JWT Authentication)
# -----------------------------------------------------------------------------


def get_current_claims(
    jwt_service: JWTServiceDep,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenPayload:
    """
    FastAPI dependency returning the verified claims of the bearer token.

    Parameters
    ----------
    jwt_service
        JWT service for token verification
    credentials
        Bearer token from Authorization header

    Returns
    -------
    The verified TokenPayload

    Raises
    ------
    MissingTokenError
        If no bearer token was sent
    TokenExpiredError
        If the token is past its expiry
    InvalidTokenError
        For any other verification failure
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError

    try:
        return jwt_service.verify_token(credentials.credentials)
    except TokenExpiredError:
        logger.info("Expired token rejected")
        raise
    except InvalidTokenError as e:
        logger.warning("Invalid token: %s", e)
        raise InvalidTokenError from e


CurrentClaims = Annotated[TokenPayload, Depends(get_current_claims)]
