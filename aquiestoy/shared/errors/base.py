# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Error hierarchy shared by every layer.

An ``AppError`` knows the HTTP status and the stable ``error`` code the API
returns for it; the Flask handler in ``http.py`` serialises it unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str | None = None
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "error": self.code,
            "message": self.message or HTTPStatus(self.status).phrase,
        }
        if self.context:
            body["context"] = dict(self.context)
        return body


class DomainError(AppError):
    """Business-rule failure; subclasses declare ``code``/``status``/``message`` as class attributes."""

    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        # Instance lookup: the class-level names shadow AppError's unset slots.
        super().__init__(
            code=code or getattr(self, "code", "domain_error"),
            status=status or getattr(self, "status", HTTPStatus.BAD_REQUEST),
            message=message or getattr(self, "message", None),
            context=context,
        )


class ConflictError(DomainError):
    code = "conflict"
    status = HTTPStatus.CONFLICT


class AuthenticationError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED


class NotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, status=status, message=message, context=context)


class ConfigurationError(InfrastructureError):
    def __init__(self, message: str, *, missing: list[str] | None = None) -> None:
        super().__init__(
            "configuration_error",
            message=message,
            context={"missing": missing} if missing else None,
        )


class DatabaseUnavailableError(InfrastructureError):
    def __init__(self, message: str = "Database is unavailable") -> None:
        super().__init__(
            "database_unavailable", status=HTTPStatus.SERVICE_UNAVAILABLE, message=message
        )


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        message: str = "Invalid request data",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, status=HTTPStatus.BAD_REQUEST, message=message, context=context)
