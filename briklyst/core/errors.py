"""Error taxonomy shared by services and routers.

Every error carries a client-safe message; handlers registered on the app render
them as ``{"error": message}`` with the matching status code.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class BriklystError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BriklystError):
    status_code = 400
    default_message = "Invalid request data"


class AuthenticationError(BriklystError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(BriklystError):
    status_code = 404
    default_message = "Not found"


class AuthorizationError(NotFoundError):
    """Caller does not own the resource; reported exactly like a missing one."""


class UpstreamError(BriklystError):
    status_code = 500
    default_message = "Something went wrong"


def _field_name(loc: tuple) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "request"


async def _handle_domain_error(_request: Request, exc: BriklystError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _handle_http_exception(_request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _handle_request_validation(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    field = _field_name(tuple(errors[0].get("loc", ()))) if errors else "request"
    return JSONResponse(status_code=400, content={"error": f"Invalid or missing field: {field}"})


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BriklystError, _handle_domain_error)
    app.add_exception_handler(HTTPException, _handle_http_exception)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)
