"""Centralized exception handlers for the FastAPI application.

Domain and auth exceptions are mapped to HTTP responses with one body
shape for every failure:

    {
        "success": false,
        "message": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Server faults add a ``details`` object when the diagnostic level is
VERBOSE; at SAFE they only carry the generic message.

Usage:
    from usergate.presentation.api.exception_handlers import (
        setup_exception_handlers,
    )

    app = FastAPI()
    setup_exception_handlers(app, settings.diagnostic_level)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from usergate.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ServerError,
    ValidationError,
)
from usergate_auth import (
    AccountInactiveError,
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    TokenExpiredError,
    TokenSigningError,
    WeakPasswordError,
)
from usergate_config.settings import DiagnosticLevel

logger = logging.getLogger(__name__)

GENERIC_SERVER_MESSAGE = "An error occurred. Please try again later."


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_USER_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
    # 404 Not Found
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ROUTE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict - already exists
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.USERNAME_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_TAKEN: status.HTTP_409_CONFLICT,
    # 500 Internal Server Error
    ErrorCode.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.TOKEN_SIGNING_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Checked in order; subclasses before their bases
AUTH_ERROR_MAPPING: list[tuple[type[AuthError], int, ErrorCode]] = [
    (WeakPasswordError, status.HTTP_400_BAD_REQUEST, ErrorCode.WEAK_PASSWORD),
    (
        InvalidCredentialsError,
        status.HTTP_401_UNAUTHORIZED,
        ErrorCode.INVALID_CREDENTIALS,
    ),
    (MissingTokenError, status.HTTP_401_UNAUTHORIZED, ErrorCode.TOKEN_MISSING),
    (TokenExpiredError, status.HTTP_401_UNAUTHORIZED, ErrorCode.TOKEN_EXPIRED),
    (AccountInactiveError, status.HTTP_403_FORBIDDEN, ErrorCode.ACCOUNT_INACTIVE),
    (InvalidTokenError, status.HTTP_403_FORBIDDEN, ErrorCode.TOKEN_INVALID),
    (
        TokenSigningError,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.TOKEN_SIGNING_FAILED,
    ),
]


def _get_status_for_exception(exc: DomainException) -> int:
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ServerError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR

    return status.HTTP_400_BAD_REQUEST


def _get_status_for_auth_error(exc: AuthError) -> tuple[int, ErrorCode]:
    for exc_type, status_code, code in AUTH_ERROR_MAPPING:
        if isinstance(exc, exc_type):
            return status_code, code
    return status.HTTP_401_UNAUTHORIZED, ErrorCode.INVALID_CREDENTIALS


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, Any] = {
        "success": False,
        "message": message,
        "code": code,
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    if location:
        return f"{'.'.join(location)}: {first.get('msg', 'invalid value')}"
    return str(first.get("msg", "Invalid request"))


def setup_exception_handlers(
    app: FastAPI,
    diagnostic_level: DiagnosticLevel = DiagnosticLevel.SAFE,
) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    diagnostic_level
        VERBOSE adds ``details`` to server fault responses
    """
    verbose = diagnostic_level == DiagnosticLevel.VERBOSE

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response."""
        status_code = _get_status_for_exception(exc)

        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Server fault on %s %s: %s (code=%s, details=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
                exc.details,
            )
            return _create_error_response(
                status_code=status_code,
                message=GENERIC_SERVER_MESSAGE,
                code=exc.code.value,
                details=exc.details if verbose else None,
            )

        logger.warning(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )
        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
        )

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle login, token and password-strength failures."""
        status_code, code = _get_status_for_auth_error(exc)

        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Auth fault on %s %s: %r",
                request.method,
                request.url.path,
                exc.__cause__ or exc,
            )
            details = None
            if verbose:
                details = {"error": f"{type(exc).__name__}: {exc.__cause__ or exc}"}
            return _create_error_response(
                status_code=status_code,
                message=GENERIC_SERVER_MESSAGE,
                code=code.value,
                details=details,
            )

        logger.warning(
            "Auth failure on %s %s: %s (code=%s)",
            request.method,
            request.url.path,
            exc.message,
            code.value,
        )
        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED and code != (
            ErrorCode.INVALID_CREDENTIALS
        ):
            headers = {"WWW-Authenticate": "Bearer"}
        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=code.value,
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed bodies and parameters are client errors (400)."""
        message = _describe_validation_error(exc)
        logger.warning(
            "Invalid request on %s %s: %s",
            request.method,
            request.url.path,
            message,
        )
        return _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=message,
            code=ErrorCode.INVALID_REQUEST.value,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Routing errors (unknown path, wrong method) in the uniform shape."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            logger.info("Route not found: %s %s", request.method, request.url.path)
            return _create_error_response(
                status_code=exc.status_code,
                message=f"Route not found: {request.method} {request.url.path}",
                code=ErrorCode.ROUTE_NOT_FOUND.value,
            )

        code = (
            ErrorCode.INTERNAL_ERROR
            if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR
            else ErrorCode.INVALID_REQUEST
        )
        return _create_error_response(
            status_code=exc.status_code,
            message=str(exc.detail),
            code=code.value,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=GENERIC_SERVER_MESSAGE,
            code=ErrorCode.INTERNAL_ERROR.value,
            details={"error": f"{type(exc).__name__}: {exc}"} if verbose else None,
        )
