# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from aquiestoy.domain.users.entities import User as DomainUser
from aquiestoy.domain.users.exceptions import EmailAlreadyRegisteredError
from aquiestoy.domain.users.repositories import UserRepository
from aquiestoy.infrastructure.db.models import User
from aquiestoy.infrastructure.db.session import Database
from aquiestoy.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        name=row.name,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def find_by_email(self, email: str) -> DomainUser | None:
        with self._database.session_scope() as session:
            row = (
                session.query(User)
                .filter(User.email == email, User.deleted_at.is_(None))
                .first()
            )
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with self._database.session_scope() as session:
            row = (
                session.query(User)
                .filter(User.id == user_id, User.deleted_at.is_(None))
                .first()
            )
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with self._database.session_scope() as session:
                row = User(
                    email=user.email,
                    name=user.name,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                    updated_at=user.created_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            # Unique index on email; also covers a concurrent registration that won the race.
            logger.info("users.repository: duplicate email rejected by unique index")
            raise EmailAlreadyRegisteredError() from exc
