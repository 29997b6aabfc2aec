# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Turn pydantic failures into the API's 400 ``validation_error`` body."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import ErrorDetails

from .base import ValidationError

_JSON_SCALARS = (str, int, float, bool, type(None))


def _field_name(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _jsonable(ctx: Mapping[str, Any]) -> dict[str, Any]:
    # ctx may hold the raised exception object itself
    return {k: v if isinstance(v, _JSON_SCALARS) else str(v) for k, v in ctx.items()}


def _describe(error: ErrorDetails) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "field": _field_name(error["loc"]) or "body",
        "type": error["type"],
        "message": error["msg"],
    }
    if "ctx" in error:
        entry["ctx"] = _jsonable(error["ctx"])
    return entry


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """``{"fields": [...], "errors": [...]}`` with one entry per failed rule."""
    errors = [_describe(error) for error in exc.errors(include_url=False, include_input=False)]
    fields = sorted({entry["field"] for entry in errors})
    return {"fields": fields, "errors": errors}


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = [
    "format_pydantic_errors",
    "raise_validation_error",
]
