"""
Exception handlers producing the shared error envelope.

Every error response has the shape ``{message, status, errors?}``; ``errors``
maps a field name to its message for validation failures.
"""
import logging
import time
from typing import Any, Dict, Optional, Sequence, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.schemas.common import ErrorResponse
from application.exceptions import (
    AuthorizationDeniedError,
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    OptimisticLockConflictError,
    RateLimitExceededError,
    ValidationFailedError,
)
from backend.security_headers import SECURITY_HEADERS

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = (
    "An unexpected error occurred. Please contact support if the problem persists."
)
_LOCATION_PREFIXES = ("body", "query", "path", "header", "cookie")
_VALUE_ERROR_PREFIX = "Value error, "


def error_response(
    status: int,
    message: str,
    errors: Optional[Dict[str, str]] = None,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, status=status, errors=errors or None, details=details)
    return JSONResponse(
        status_code=status,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


def field_name(loc: Sequence[Union[str, int]]) -> str:
    """
    Flatten a pydantic error location into a field path.

    Examples:
        ("body", "reps") -> "reps"
        ("body", "exercises", 0, "exercise_id") -> "exercises[0].exercise_id"
        ("body",) -> "request"
    """
    parts = list(loc)
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    name = ""
    for part in parts:
        if isinstance(part, int):
            name += f"[{part}]"
        else:
            name += f".{part}" if name else str(part)
    return name or "request"


def _clean_message(message: str) -> str:
    if message.startswith(_VALUE_ERROR_PREFIX):
        return message[len(_VALUE_ERROR_PREFIX):]
    return message


# =============================================================================
# Handlers
# =============================================================================


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: Dict[str, str] = {}
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            name = "request"
        else:
            name = field_name(error.get("loc", ()))
        # First message per field wins
        errors.setdefault(name, _clean_message(str(error.get("msg", "Invalid value"))))
    logger.info(f"Validation failed on {request.method} {request.url.path}: {sorted(errors)}")
    return error_response(400, "Validation failed", errors)


async def validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
    return error_response(400, exc.message, exc.errors)


async def business_rule_handler(request: Request, exc: BusinessRuleError) -> JSONResponse:
    logger.warning(f"Business rule violated on {request.url.path}: {exc.message}")
    errors = {exc.field: exc.message} if exc.field else None
    return error_response(400, exc.message, errors)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(404, exc.message)


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    details = exc.details() if isinstance(exc, OptimisticLockConflictError) else None
    logger.warning(f"Conflict on {request.method} {request.url.path}: {exc.message}")
    return error_response(409, exc.message, details=details)


async def authorization_denied_handler(
    request: Request, exc: AuthorizationDeniedError
) -> JSONResponse:
    return error_response(403, exc.message)


async def rate_limit_handler(request: Request, exc: RateLimitExceededError) -> JSONResponse:
    retry_after = max(1, int(exc.retry_after_seconds))
    headers = {
        "Retry-After": str(retry_after),
        "X-RateLimit-Reset": str(int(time.time()) + retry_after),
    }
    return error_response(429, exc.message, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc
    )
    # Runs outside the middleware stack, so security headers are added here
    return error_response(500, UNEXPECTED_ERROR_MESSAGE, headers=dict(SECURITY_HEADERS))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to ``app``."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationFailedError, validation_failed_handler)
    app.add_exception_handler(BusinessRuleError, business_rule_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(AuthorizationDeniedError, authorization_denied_handler)
    app.add_exception_handler(RateLimitExceededError, rate_limit_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
