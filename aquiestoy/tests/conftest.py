from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.pool import StaticPool

from aquiestoy.app import create_app
from aquiestoy.application.services.tokens import JwtTokenService
from aquiestoy.infrastructure.db import Database
from aquiestoy.shared.config import AppConfig, AuthConfig

# HS256 keys shorter than 32 bytes make PyJWT warn.
TEST_SECRET = "test-secret-for-signing-tokens-0123456789"


@pytest.fixture()
def secret() -> str:
    return TEST_SECRET


@pytest.fixture()
def token_service(secret: str) -> JwtTokenService:
    return JwtTokenService(secret)


@pytest.fixture()
def database() -> Iterator[Database]:
    db = Database.from_url("sqlite://", poolclass=StaticPool)
    db.create_schema()
    yield db
    db.dispose()


@pytest.fixture()
def app_config(secret: str) -> AppConfig:
    return AppConfig(
        APP_ENV="test",
        auth=AuthConfig(JWT_SECRET=secret, BCRYPT_ROUNDS=4),
    )


@pytest.fixture()
def app(app_config: AppConfig, database: Database) -> Flask:
    return create_app(app_config, database)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
