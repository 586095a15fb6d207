"""
FastAPI exception handlers.

Every error leaves the service as `{"error_code", "message"}` in the locale
negotiated from Accept-Language, plus a `debug` block when
`settings.include_debug_info` is on.
"""

import logging
import traceback

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront_backend.exceptions.exceptions import (
    BadRequestException,
    ForbiddenException,
    InternalServerException,
    NotFoundException,
    StorefrontException,
    UnauthorizedException,
)
from storefront_backend.i18n import parse_accept_language
from storefront_backend.settings import settings

logger = logging.getLogger(__name__)

_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: BadRequestException,
    status.HTTP_401_UNAUTHORIZED: UnauthorizedException,
    status.HTTP_403_FORBIDDEN: ForbiddenException,
    status.HTTP_404_NOT_FOUND: NotFoundException,
}


def _request_locale(request: Request) -> str:
    return parse_accept_language(request.headers.get("accept-language"))


def _render(exc: StorefrontException, **extra) -> JSONResponse:
    body = exc.to_response(include_debug=settings.include_debug_info)
    body.update(extra)
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers or None)


def log_error(request: Request, exc: StorefrontException) -> None:
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code}",
        extra={
            "error_code": exc.error_code,
            "user_id": exc.user_id,
            "function": exc.function_name,
            "context": exc.context,
        },
    )


async def storefront_exception_handler(request: Request, exc: StorefrontException) -> JSONResponse:
    log_error(request, exc)
    return _render(exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures become 400 `validation_failed` with per-field details."""
    errors = [
        {
            # drop the leading "body"/"query"/"path"
            "field": " -> ".join(str(part) for part in error["loc"][1:]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    bad_request = BadRequestException(
        message_key="validation_failed",
        locale=_request_locale(request),
        context={"validation_errors": errors},
    )
    log_error(request, bad_request)
    return _render(bad_request, details={"validation_errors": errors})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework errors (unknown route, method not allowed, ...) in the same shape."""
    exception_class = _BY_STATUS.get(exc.status_code, InternalServerException)
    converted = exception_class(
        locale=_request_locale(request),
        headers=getattr(exc, "headers", None),
    )
    log_error(request, converted)
    return _render(converted)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)

    context = {"exception_type": type(exc).__name__}
    if settings.include_debug_info:
        context["traceback"] = traceback.format_exc()

    return _render(InternalServerException(locale=_request_locale(request), context=context))


def register_exception_handlers(app) -> None:
    app.add_exception_handler(StorefrontException, storefront_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
