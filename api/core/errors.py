"""
HTTP error mapping shared by all routers.

- request validation failures -> 400 {"error": <static message>}
- 404                         -> plain text body
- other HTTP errors           -> {"error": <detail>}
- StorageError                -> 500 {"error": "Server error", "details": <driver message>}
"""

from __future__ import annotations

import logging
from typing import Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .db import StorageError

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"
INVALID_PAYLOAD_MESSAGE = "Invalid request payload"

# (method, route path) -> (message, required body fields).
_REQUIRED_FIELDS: dict[tuple[str, str], tuple[str, frozenset[str]]] = {}


def register_required_message(method: str, path: str, message: str, fields: Iterable[str]) -> None:
    _REQUIRED_FIELDS[(method.upper(), path)] = (message, frozenset(fields))


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return str(getattr(route, "path", request.url.path))


_EMPTY_INPUTS = (None, "", 0)


def _is_missing_field_error(error: dict, fields: frozenset[str]) -> bool:
    # No body at all, or an absent/null/empty value for a required field.
    loc = tuple(error.get("loc") or ())
    if not loc or loc[0] != "body":
        return False
    if len(loc) == 1:
        return error.get("type") == "missing"
    if loc[-1] not in fields:
        return False
    return error.get("type") == "missing" or error.get("input") in _EMPTY_INPUTS


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = INVALID_PAYLOAD_MESSAGE
    required = _REQUIRED_FIELDS.get((request.method, _route_path(request)))
    if required is not None and any(_is_missing_field_error(e, required[1]) for e in errors):
        message = required[0]
    logger.info("request_rejected method=%s path=%s errors=%s", request.method, request.url.path, len(errors))
    return JSONResponse(status_code=400, content={"error": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):  # noqa: ARG001
    if exc.status_code == 404:
        return PlainTextResponse(str(exc.detail), status_code=404, headers=exc.headers)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def storage_exception_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(
        "storage_error method=%s path=%s error=%s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"error": SERVER_ERROR_MESSAGE, "details": str(exc)},
    )


def install(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(StorageError, storage_exception_handler)
