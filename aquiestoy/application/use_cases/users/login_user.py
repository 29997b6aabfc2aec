# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from aquiestoy.domain.users.entities import AuthenticatedUser
from aquiestoy.domain.users.exceptions import InvalidCredentialsError
from aquiestoy.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from aquiestoy.shared.logging import logger


class LoginUserUseCase:
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

    def execute(self, email: str, password: str) -> AuthenticatedUser:
        user = self._users.find_by_email(email)
        password_valid = user is not None and self._password_hasher.verify(
            password, user.password_hash
        )

        if not password_valid:
            logger.info(f"users.login: rejected, user_known={user is not None}")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.id, user.email)
        logger.info(f"users.login: ok user_id={user.id}")
        return AuthenticatedUser.from_user(user, token)
