# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import AuthenticatedUser, SessionClaims, User
from .users.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
    MalformedTokenError,
    TokenExpiredError,
    TokenSignatureError,
    UserNotFoundError,
)

__all__ = [
    "AuthenticatedUser",
    "SessionClaims",
    "User",
    "EmailAlreadyRegisteredError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MalformedTokenError",
    "TokenExpiredError",
    "TokenSignatureError",
    "UserNotFoundError",
]
