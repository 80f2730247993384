"""
Exception handlers - map the error taxonomy to HTTP responses.

Public bodies are fixed per error class. Anything unexpected becomes a
500 "Server error"; the original exception is logged and reported,
never echoed to the client.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from stockroom.core.errors import (
    AuthError,
    CredentialsError,
    StockroomError,
    UnknownError,
)
from stockroom.integrations.sentry import capture_exception

logger = logging.getLogger(__name__)


async def handle_auth_error(request: Request, exc: AuthError):
    return PlainTextResponse(AuthError.public_message, status_code=exc.status_code)


async def handle_credentials_error(request: Request, exc: CredentialsError):
    return JSONResponse({"message": exc.public_message}, status_code=exc.status_code)


async def handle_app_error(request: Request, exc: StockroomError):
    if exc.status_code >= 500:
        # Handled here, so the Sentry integration never sees it.
        capture_exception(exc, path=request.url.path, method=request.method)
        return _server_error(request, exc)
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc}")
    return JSONResponse({"error": exc.public_message}, status_code=exc.status_code)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    return JSONResponse({"errors": errors}, status_code=400)


def _server_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse({"error": UnknownError.public_message}, status_code=500)


async def handle_unexpected_error(request: Request, exc: Exception):
    # Starlette re-raises after this handler; the FastAPI integration reports it.
    return _server_error(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Install the taxonomy → status code mapping on an app."""
    app.add_exception_handler(AuthError, handle_auth_error)
    app.add_exception_handler(CredentialsError, handle_credentials_error)
    app.add_exception_handler(StockroomError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
