# File: /boardview/core/error_handlers.py | Version: 1.1 | Title: Standardized Error Handlers (optional)
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from boardview.core.exceptions import (
    BoardViewError,
    CardNotFoundError,
    MissingContextError,
    PersistenceError,
)

log = logging.getLogger(__name__)

_CODE_MAP = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
    500: "INTERNAL_SERVER_ERROR",
    502: "BAD_GATEWAY",
}


def _err(code: int, message: str):
    return {"error": {"code": _CODE_MAP.get(code, "ERROR"), "message": message}}


def status_for(exc: BoardViewError) -> int:
    if isinstance(exc, MissingContextError):
        return 409
    if isinstance(exc, CardNotFoundError):
        return 404
    if isinstance(exc, PersistenceError):
        return 502
    return 400


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_exc(_req: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code, content=_err(exc.status_code, str(exc.detail))
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_exc(_req: Request, exc: RequestValidationError):
        return JSONResponse(status_code=422, content=_err(422, "Validation error"))

    @app.exception_handler(BoardViewError)
    async def _domain_exc(_req: Request, exc: BoardViewError):
        code = status_for(exc)
        return JSONResponse(status_code=code, content=_err(code, str(exc)))

    @app.exception_handler(Exception)
    async def _unhandled(_req: Request, exc: Exception):
        # Avoid leaking internals
        log.exception("Unhandled error: %s", exc)
        return JSONResponse(status_code=500, content=_err(500, "Internal server error"))
