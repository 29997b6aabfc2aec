# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    email: str
    name: str
    password_hash: str = field(repr=False)
    created_at: datetime


@dataclass(slots=True, frozen=True)
class SessionClaims:
    """Identity proven by a verified session token."""

    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class AuthenticatedUser:
    """Public identity fields of a user plus a freshly issued token."""

    id: int
    email: str
    name: str
    token: str = field(repr=False)

    @classmethod
    def from_user(cls, user: User, token: str) -> AuthenticatedUser:
        return cls(id=user.id, email=user.email, name=user.name, token=token)
