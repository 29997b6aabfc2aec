# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from aquiestoy.shared.errors.base import AuthenticationError, ConflictError, NotFoundError


class EmailAlreadyRegisteredError(ConflictError):
    code = "email_already_registered"
    message = "Email is already registered"


class InvalidCredentialsError(AuthenticationError):
    code = "invalid_credentials"
    message = "Invalid email or password"


class UserNotFoundError(NotFoundError):
    code = "user_not_found"
    message = "User not found"


class InvalidTokenError(AuthenticationError):
    """Any token that failed verification.

    Subclasses tell signature, expiry and parse failures apart for logs and
    tests; clients always see the same ``invalid_token`` response.
    """

    code = "invalid_token"
    message = "Invalid token"
    reason = "invalid"


class TokenSignatureError(InvalidTokenError):
    reason = "signature"


class TokenExpiredError(InvalidTokenError):
    reason = "expired"


class MalformedTokenError(InvalidTokenError):
    reason = "malformed"
