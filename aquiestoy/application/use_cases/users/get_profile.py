"""Use-case for reading the profile of an authenticated user."""

from __future__ import annotations

from aquiestoy.domain.users.entities import User
from aquiestoy.domain.users.exceptions import UserNotFoundError
from aquiestoy.domain.users.repositories import UserRepository
from aquiestoy.shared.logging import logger


class GetProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            # A valid token can outlive its user row.
            logger.warning(f"users.profile: token references missing user_id={user_id}")
            raise UserNotFoundError()
        return user
