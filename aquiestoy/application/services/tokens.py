# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, time-bounded session tokens (HS256 JWT)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from aquiestoy.domain.users.entities import SessionClaims
from aquiestoy.domain.users.exceptions import (
    MalformedTokenError,
    TokenExpiredError,
    TokenSignatureError,
)
from aquiestoy.domain.users.repositories import TokenService
from aquiestoy.shared.errors.base import ConfigurationError
from aquiestoy.shared.logging import logger

JWT_ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL = timedelta(hours=24)

_REQUIRED_CLAIMS = ["user_id", "email", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    """Issues and validates JWTs signed with a process-wide HMAC secret.

    There is no revocation: any token with a valid signature whose ``exp`` lies
    in the future is accepted.
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ConfigurationError("JWT signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    def issue(self, user_id: int, email: str) -> str:
        now = self._clock()
        payload = {
            "user_id": user_id,
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def validate(self, token: str) -> SessionClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidSignatureError as exc:
            raise TokenSignatureError() from exc
        except jwt.InvalidTokenError as exc:
            logger.debug(f"tokens.validate: rejected malformed token ({type(exc).__name__})")
            raise MalformedTokenError() from exc

        user_id = payload["user_id"]
        email = payload["email"]
        # bool is an int subclass; a JSON true must not pass as user id 1
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
            raise MalformedTokenError()

        return SessionClaims(
            user_id=user_id,
            email=email,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


__all__ = ["DEFAULT_TOKEN_TTL", "JWT_ALGORITHM", "JwtTokenService"]
