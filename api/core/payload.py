"""
Request body reading for create endpoints.

Bodies may be JSON or form-encoded (`application/x-www-form-urlencoded` or
`multipart/form-data`). Either way the result is validated against a pydantic
model, and failures are raised as `RequestValidationError` so they render
like any other 422.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

ModelT = TypeVar("ModelT", bound=BaseModel)


def _content_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()


async def read_body(request: Request) -> Any:
    """
    Return the decoded body. A missing body reads as `{}`.
    """
    if _content_type(request) in FORM_CONTENT_TYPES:
        form = await request.form()
        # Form fields are always strings; an empty one counts as absent.
        return {key: (value or None) for key, value in form.items()}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
        ) from exc


async def parse_body(request: Request, model: type[ModelT]) -> ModelT:
    data = await read_body(request)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc
