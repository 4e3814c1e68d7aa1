"""
Global middleware: request ids and access logging.
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _log_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.WARNING
    if status_code >= 400:
        return logging.INFO
    return logging.DEBUG


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        # Path only: query strings and headers may carry credentials.
        logger.log(
            _log_level(response.status_code),
            "[%s] %s %s -> %d in %.3fs",
            request_id, request.method, request.url.path, response.status_code, elapsed,
        )
        return response
