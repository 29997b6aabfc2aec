"""Password hashing strategies."""

from __future__ import annotations

import bcrypt

from aquiestoy.domain.users.repositories import PasswordHasher
from aquiestoy.shared.errors.base import InfrastructureError

DEFAULT_ROUNDS = 12


class HashingError(InfrastructureError):
    def __init__(self) -> None:
        super().__init__("password_hashing_failed", message="Could not process password")


class BcryptPasswordHasher(PasswordHasher):
    """bcrypt with a fixed work factor; the salt lives inside the digest."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        try:
            digest = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds))
        except (TypeError, ValueError) as exc:
            raise HashingError() from exc
        return digest.decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("ascii"))
        except (TypeError, ValueError, UnicodeEncodeError):
            return False
