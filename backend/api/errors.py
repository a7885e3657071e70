"""
Exception handlers.

Module code raises MabarError subclasses carrying an enum reason; this is
the one place those become HTTP responses. Authentication failures always
get a generic message so a client cannot tell an unknown email from a wrong
password, or an expired token from a forged one.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from modules.auth.exceptions import InvalidCredentialsError
from modules.authorization.exceptions import NoRoleAssignedError
from modules.passwords.exceptions import WeakPasswordError
from modules.passwords.models import PasswordRejection
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    MabarError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)

from .models.errors import ErrorResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_AUTHENTICATION = "Invalid authentication credentials"
NO_ROLE_ASSIGNED = "No role assigned. Please complete your profile setup."
INSUFFICIENT_PERMISSIONS = "Insufficient permissions"
RATE_LIMITED = "Rate limit exceeded"
INTERNAL_ERROR = "Internal server error"


def weak_password_message(error: WeakPasswordError) -> str:
    """Client-facing text for a rejected password."""
    details = error.details
    messages = {
        PasswordRejection.EMPTY: "Password is required",
        PasswordRejection.TOO_SHORT: f"Password must be at least {details.get('min_length')} characters long",
        PasswordRejection.TOO_LONG: f"Password must be at most {details.get('max_length')} characters long",
        PasswordRejection.MISSING_UPPERCASE: "Password must contain at least one uppercase letter",
        PasswordRejection.MISSING_LOWERCASE: "Password must contain at least one lowercase letter",
        PasswordRejection.MISSING_NUMBER: "Password must contain at least one number",
        PasswordRejection.MISSING_SPECIAL: "Password must contain at least one special character",
        PasswordRejection.TOO_WEAK: "Password is too weak. Avoid common words, names and patterns.",
    }
    return messages[error.reason]


def _error_response(status_code: int, error: str, detail: str, code: str, headers=None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    if isinstance(exc, WeakPasswordError):
        detail = weak_password_message(exc)
    else:
        detail = exc.message
    logger.info(f"Rejected input on {request.url.path}: {exc.code} {exc.details.get('reason', '')}".rstrip())
    return _error_response(400, "Bad Request", detail, exc.code)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Malformed request body on {request.url.path}")
    body = ValidationErrorResponse(detail=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=400, content=body.model_dump())


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    detail = INVALID_CREDENTIALS if isinstance(exc, InvalidCredentialsError) else INVALID_AUTHENTICATION
    logger.warning(f"Authentication rejected on {request.url.path}: {exc.message}")
    return _error_response(
        401,
        "Unauthorized",
        detail,
        exc.code,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def authorization_error_handler(request: Request, exc: AuthorizationError) -> JSONResponse:
    detail = NO_ROLE_ASSIGNED if isinstance(exc, NoRoleAssignedError) else INSUFFICIENT_PERMISSIONS
    logger.info(f"Authorization denied on {request.url.path}: {exc.message}")
    return _error_response(403, "Forbidden", detail, exc.code)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(404, "Not Found", exc.message, exc.code)


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return _error_response(409, "Conflict", exc.message, exc.code)


async def rate_limit_handler(request: Request, exc: RateLimitExceededError) -> JSONResponse:
    return _error_response(429, "Too Many Requests", RATE_LIMITED, exc.code)


async def internal_error_handler(request: Request, exc: MabarError) -> JSONResponse:
    logger.exception(f"Unhandled {exc.code} on {request.url.path}: {exc.to_dict()}", exc_info=exc)
    return _error_response(500, "Internal Server Error", INTERNAL_ERROR, "INTERNAL_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers; the most specific base class wins."""
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(AuthorizationError, authorization_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(RateLimitExceededError, rate_limit_handler)
    app.add_exception_handler(MabarError, internal_error_handler)
