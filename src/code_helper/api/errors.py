"""Exception handlers turning every failure into the ``{success: false, ...}`` envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from code_helper.errors import AuthError, CodeTooLargeError, CompletionError, ValidationError

logger = logging.getLogger(__name__)


def _envelope(status_code: int, message: str, **extra: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    where = ".".join(loc)
    msg = first.get("msg", "invalid value")
    return f"Invalid request body: {where}: {msg}" if where else f"Invalid request body: {msg}"


async def _code_too_large(_request: Request, exc: CodeTooLargeError) -> JSONResponse:
    return _envelope(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, str(exc))


async def _validation(_request: Request, exc: ValidationError) -> JSONResponse:
    return _envelope(status.HTTP_400_BAD_REQUEST, str(exc))


async def _request_validation(_request: Request, exc: RequestValidationError) -> JSONResponse:
    return _envelope(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))


async def _completion(_request: Request, exc: CompletionError) -> JSONResponse:
    logger.warning("completion failed (%s, %s): %s", exc.provider, exc.kind, exc)
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        f"{exc.provider.capitalize()} API Error",
        error=str(exc),
    )


async def _auth(_request: Request, exc: AuthError) -> JSONResponse:
    # Refused signups/logins answer 200 with success=false; existing clients rely on it.
    return _envelope(status.HTTP_200_OK, str(exc))


async def _http(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return _envelope(status.HTTP_404_NOT_FOUND, "Route not found")
    return _envelope(exc.status_code, str(exc.detail))


async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", error=str(exc))


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CodeTooLargeError, _code_too_large)
    app.add_exception_handler(ValidationError, _validation)
    app.add_exception_handler(RequestValidationError, _request_validation)
    app.add_exception_handler(CompletionError, _completion)
    app.add_exception_handler(AuthError, _auth)
    app.add_exception_handler(StarletteHTTPException, _http)
    app.add_exception_handler(Exception, _unhandled)
