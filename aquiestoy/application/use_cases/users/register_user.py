# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from aquiestoy.domain.users.entities import AuthenticatedUser, User
from aquiestoy.domain.users.exceptions import EmailAlreadyRegisteredError
from aquiestoy.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from aquiestoy.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str, name: str) -> AuthenticatedUser:
        # Fast path only; the repository's unique index is what rejects racing duplicates.
        if self._users.find_by_email(email) is not None:
            raise EmailAlreadyRegisteredError()

        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,  # assigned by the store
            email=email,
            name=name,
            password_hash=hashed,
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)

        token = self._tokens.issue(persisted.id, persisted.email)
        logger.info(f"users.register: created user_id={persisted.id}")
        return AuthenticatedUser.from_user(persisted, token)
