# scheduler_bridge/api/errors.py

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from scheduler_bridge.core.errors import BadRequest, BridgeError, InternalError

log = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the error taxonomy to responses.

    Every failure body is ``{"success": false, "code": ..., "message": ...}``
    with a fixed message; upstream bodies and tracebacks never reach clients.
    """

    @app.exception_handler(BridgeError)
    async def _bridge_error_handler(request: Request, exc: BridgeError) -> Response:
        log.info("%s %s -> %s (%s)", request.method, request.url.path, exc.status_code, exc.code)
        return JSONResponse(status_code=exc.status_code, content=exc.to_public_dict())

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        log.info("%s %s -> request validation failed: %d errors", request.method, request.url.path, len(exc.errors()))
        error = BadRequest()
        return JSONResponse(status_code=error.status_code, content=error.to_public_dict())

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        log.exception("Unhandled error processing %s %s", request.method, request.url.path)
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content=error.to_public_dict())


__all__ = ["register_exception_handlers"]
