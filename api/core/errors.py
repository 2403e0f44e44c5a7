"""
API error types and their JSON rendering.

Every error leaves the API as `{"error": "<message>"}` with the status code
carried by the exception. Request validation failures (bad path params,
wrongly typed body fields) are rendered the same way with a 422.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = ("body", "path", "query", "header", "cookie")


class PublicationsError(RuntimeError):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingFieldError(PublicationsError):
    status_code = 422

    def __init__(self, field: str, *, expected_format: str) -> None:
        super().__init__(f"Expected format: {expected_format}. You're missing a \"{field}\" property.")
        self.field = field


class NotFoundError(PublicationsError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(PublicationsError):
    """
    A query failed. The message is the raw driver error text.
    """


def validation_message(errors: list[dict[str, Any]]) -> str:
    """
    One-line message for the first validation error, naming the field.
    """
    if not errors:
        return "Invalid request."

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in _LOCATION_PREFIXES]
    msg = str(first.get("msg") or "Invalid value")
    if loc:
        return f"Invalid \"{loc[-1]}\" property: {msg}."
    return f"Invalid request body: {msg}."


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PublicationsError)
    async def publications_error_handler(request: Request, exc: PublicationsError) -> JSONResponse:
        if isinstance(exc, StorageError):
            logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = validation_message(list(exc.errors()))
        logger.warning("Validation error on %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=422, content={"error": message})
