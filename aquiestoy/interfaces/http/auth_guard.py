# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, request

from aquiestoy.domain.users.entities import SessionClaims
from aquiestoy.domain.users.exceptions import InvalidTokenError
from aquiestoy.domain.users.repositories import TokenService
from aquiestoy.shared.errors.base import AuthenticationError
from aquiestoy.shared.logging import logger

BEARER_SCHEME = "Bearer"


class MissingTokenError(AuthenticationError):
    code = "missing_token"
    message = "Authorization token required"


class InvalidTokenFormatError(AuthenticationError):
    code = "invalid_token_format"
    message = "Invalid token format"


class BearerAuthGuard:
    """Gate for protected views.

    Rejections raise an ``AuthenticationError`` before the view runs; on
    success ``g.user_id`` and ``g.email`` carry the token's identity.
    """

    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def authenticate(self, header: str | None) -> SessionClaims:
        if not header:
            raise MissingTokenError()

        parts = header.split()
        if len(parts) != 2 or parts[0] != BEARER_SCHEME:
            raise InvalidTokenFormatError()

        return self._tokens.validate(parts[1])

    def __call__(self, view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def inner(*args: Any, **kwargs: Any) -> Any:
            try:
                claims = self.authenticate(request.headers.get("Authorization"))
            except InvalidTokenError as exc:
                logger.warning(
                    f"auth.guard: token rejected ({exc.reason}) on {request.method} {request.path}"
                )
                raise
            except AuthenticationError as exc:
                logger.warning(f"auth.guard: {exc.code} on {request.method} {request.path}")
                raise

            g.user_id = claims.user_id
            g.email = claims.email
            logger.debug(f"auth.guard: ok user={claims.user_id} {request.method} {request.path}")
            return view(*args, **kwargs)

        return inner


__all__ = ["BearerAuthGuard", "InvalidTokenFormatError", "MissingTokenError"]
