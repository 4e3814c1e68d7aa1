"""
Exception handlers: every failure leaves the app as ``{"error": ...}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from auth.errors import STATUS_BY_KIND, AppError, ErrorKind, StoreFailureError

logger = logging.getLogger(__name__)


def error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _field_name(err: dict) -> str:
    # json_invalid errors carry a character offset, not a field, in their loc.
    if err.get("type") == "json_invalid":
        return "body"
    return ".".join(str(p) for p in err.get("loc", ())[1:]) or "body"


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the handlers that map errors to JSON bodies."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.kind.value, exc.message)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        fields = sorted({_field_name(err) for err in exc.errors()})
        return JSONResponse(
            status_code=STATUS_BY_KIND[ErrorKind.VALIDATION],
            content={"error": f"Invalid or missing fields: {', '.join(fields)}"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(StoreFailureError("Internal server error"))
