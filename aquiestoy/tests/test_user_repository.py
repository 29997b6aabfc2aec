from __future__ import annotations

import threading
from datetime import UTC, datetime
from pathlib import Path

import pytest

from aquiestoy.application.services.password_hashing import BcryptPasswordHasher
from aquiestoy.application.services.tokens import JwtTokenService
from aquiestoy.application.use_cases.users.register_user import RegisterUserUseCase
from aquiestoy.domain.users.entities import User as DomainUser
from aquiestoy.domain.users.exceptions import EmailAlreadyRegisteredError
from aquiestoy.infrastructure.db import Database
from aquiestoy.infrastructure.db.models import User
from aquiestoy.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)


def _new_user(email: str, name: str = "Alice") -> DomainUser:
    return DomainUser(
        id=0,
        email=email,
        name=name,
        password_hash="$2b$04$placeholder",
        created_at=datetime.now(UTC),
    )


@pytest.fixture()
def repository(database: Database) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(database)


def _soft_delete(database: Database, user_id: int) -> None:
    with database.session_scope() as session:
        session.get(User, user_id).deleted_at = datetime.now(UTC)


def test_add_assigns_id_and_timestamps(repository: SqlAlchemyUserRepository) -> None:
    stored = repository.add(_new_user("alice@example.com"))

    assert stored.id > 0
    assert stored.email == "alice@example.com"
    assert stored.created_at is not None


def test_add_keeps_entity_creation_time(repository: SqlAlchemyUserRepository) -> None:
    created = datetime(2024, 3, 1, 12, 30, 45, tzinfo=UTC)
    user = DomainUser(
        id=0,
        email="alice@example.com",
        name="Alice",
        password_hash="$2b$04$placeholder",
        created_at=created,
    )

    stored = repository.add(user)
    reloaded = repository.find_by_id(stored.id)

    # SQLite hands back naive datetimes
    assert stored.created_at.replace(tzinfo=None) == created.replace(tzinfo=None)
    assert reloaded is not None
    assert reloaded.created_at.replace(tzinfo=None) == created.replace(tzinfo=None)


def test_find_by_email_and_id(repository: SqlAlchemyUserRepository) -> None:
    stored = repository.add(_new_user("alice@example.com"))

    by_email = repository.find_by_email("alice@example.com")
    by_id = repository.find_by_id(stored.id)

    assert by_email is not None and by_email.id == stored.id
    assert by_id is not None and by_id.email == "alice@example.com"
    assert by_id.password_hash == "$2b$04$placeholder"
    assert repository.find_by_email("bob@example.com") is None
    assert repository.find_by_id(stored.id + 100) is None


def test_ids_are_not_reused(repository: SqlAlchemyUserRepository) -> None:
    first = repository.add(_new_user("a@example.com"))
    second = repository.add(_new_user("b@example.com"))

    assert second.id != first.id


def test_duplicate_email_is_rejected(
    repository: SqlAlchemyUserRepository, database: Database
) -> None:
    repository.add(_new_user("alice@example.com"))

    with pytest.raises(EmailAlreadyRegisteredError):
        repository.add(_new_user("alice@example.com", name="Impostor"))

    with database.session_scope() as session:
        assert session.query(User).count() == 1


def test_soft_deleted_user_is_invisible(
    repository: SqlAlchemyUserRepository, database: Database
) -> None:
    stored = repository.add(_new_user("alice@example.com"))
    _soft_delete(database, stored.id)

    assert repository.find_by_email("alice@example.com") is None
    assert repository.find_by_id(stored.id) is None


def test_soft_deleted_email_still_occupies_unique_index(
    repository: SqlAlchemyUserRepository, database: Database
) -> None:
    stored = repository.add(_new_user("alice@example.com"))
    _soft_delete(database, stored.id)

    with pytest.raises(EmailAlreadyRegisteredError):
        repository.add(_new_user("alice@example.com"))


def test_concurrent_registration_has_single_winner(tmp_path: Path, secret: str) -> None:
    database = Database.from_url(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    database.create_schema()
    use_case = RegisterUserUseCase(
        users=SqlAlchemyUserRepository(database),
        tokens=JwtTokenService(secret),
        password_hasher=BcryptPasswordHasher(rounds=4),
    )
    attempts = 4
    barrier = threading.Barrier(attempts)
    outcomes: list[str] = []
    lock = threading.Lock()

    def register() -> None:
        barrier.wait()
        try:
            use_case.execute("race@example.com", "secret123", "Racer")
            outcome = "created"
        except EmailAlreadyRegisteredError:
            outcome = "conflict"
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=register) for _ in range(attempts)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    try:
        assert sorted(outcomes) == ["conflict"] * (attempts - 1) + ["created"]
        with database.session_scope() as session:
            assert session.query(User).filter(User.email == "race@example.com").count() == 1
    finally:
        database.dispose()
