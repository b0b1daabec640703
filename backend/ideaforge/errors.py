"""Error taxonomy and the handlers that render every failure as an envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .schemas.common import failure

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal Server Error"


class IdeaForgeError(Exception):
    """Base class for errors raised by IdeaForge code paths."""

    status_code = 500
    default_message = GENERIC_SERVER_ERROR

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(IdeaForgeError):
    status_code = 400
    default_message = "Validation Error"


class Unauthorized(IdeaForgeError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(IdeaForgeError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(IdeaForgeError):
    status_code = 404
    default_message = "Not Found"


class TooManyRequests(IdeaForgeError):
    status_code = 429
    default_message = "Too Many Requests"


class GatewayError(IdeaForgeError):
    """An upstream provider (chain, storage, inference) failed."""


def _respond(request: Request, status_code: int, message: str, *, exc: BaseException | None = None) -> JSONResponse:
    if status_code >= 500:
        logger.error(
            "API error %s %s -> %s: %s",
            request.method,
            request.url.path,
            status_code,
            message,
            exc_info=exc,
        )
        settings = getattr(request.app.state, "settings", None)
        if settings is not None and settings.is_production:
            message = GENERIC_SERVER_ERROR
    else:
        logger.info("API error %s %s -> %s: %s", request.method, request.url.path, status_code, message)
    return JSONResponse(status_code=status_code, content=failure(message))


async def handle_ideaforge_error(request: Request, exc: IdeaForgeError) -> JSONResponse:
    return _respond(request, exc.status_code, exc.message, exc=exc.__cause__ or exc)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return _respond(request, 400, ValidationFailed.default_message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else GENERIC_SERVER_ERROR
    response = _respond(request, exc.status_code, detail)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def handle_rate_limit(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return _respond(request, TooManyRequests.status_code, TooManyRequests.default_message)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    return _respond(request, 500, GENERIC_SERVER_ERROR, exc=exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(IdeaForgeError, handle_ideaforge_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RateLimitExceeded, handle_rate_limit)
    app.add_exception_handler(Exception, handle_unexpected)
