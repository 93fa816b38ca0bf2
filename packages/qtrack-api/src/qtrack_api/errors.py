"""Translate domain exceptions into ``{"error", "type"}`` JSON responses."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from qtrack.errors import (
    ConflictError,
    NotFoundError,
    QTrackError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first.
_STATUS: list[tuple[type[QTrackError], int, str]] = [
    (ValidationError, 400, "validation"),
    (UnauthorizedError, 401, "unauthorized"),
    (NotFoundError, 404, "not_found"),
    (ConflictError, 409, "conflict"),
]

_HTTP_TYPES = {
    400: "validation",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    409: "conflict",
    500: "internal",
}


def error_body(message: str, kind: str) -> dict[str, str]:
    return {"error": message, "type": kind}


async def _domain_error(request: Request, exc: QTrackError) -> JSONResponse:
    for cls, status, kind in _STATUS:
        if isinstance(exc, cls):
            return JSONResponse(error_body(str(exc), kind), status_code=status)
    logger.error("Unmapped domain error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(error_body("Internal server error", "internal"), status_code=500)


async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(error_body("; ".join(parts) or "Invalid request", "validation"), status_code=400)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        error_body(str(exc.detail), _HTTP_TYPES.get(exc.status_code, "error")),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(error_body("Internal server error", "internal"), status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QTrackError, _domain_error)
    app.add_exception_handler(RequestValidationError, _request_validation)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected)
