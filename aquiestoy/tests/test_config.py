from __future__ import annotations

import pytest

from aquiestoy.infrastructure.db import Database, connect_database
from aquiestoy.shared.config import (
    DEFAULT_JWT_SECRET,
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    SecurityConfig,
)
from aquiestoy.shared.errors.base import ConfigurationError, DatabaseUnavailableError

_ENV_VARS = (
    "DB_HOST",
    "DB_PORT",
    "DB_USER",
    "DB_PASSWORD",
    "DB_NAME",
    "DB_SSLMODE",
    "DATABASE_URL",
    "JWT_SECRET",
    "JWT_TTL_SECONDS",
    "BCRYPT_ROUNDS",
    "APP_ENV",
    "ALLOWED_ORIGINS",
    "ENABLE_HSTS",
    "LOG_LEVEL",
    "DEBUG_LOGGING",
    "HOST",
    "PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_database_defaults_report_missing_variables() -> None:
    config = DatabaseConfig(_env_file=None)

    assert config.port == 5432
    assert config.sslmode == "require"
    assert config.missing_variables() == ["DB_HOST", "DB_USER", "DB_PASSWORD", "DB_NAME"]


def test_database_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("DB_USER", "app")
    monkeypatch.setenv("DB_PASSWORD", "hunter22")
    monkeypatch.setenv("DB_NAME", "aquiestoy")
    monkeypatch.setenv("DB_SSLMODE", "disable")

    config = DatabaseConfig(_env_file=None)

    assert (config.host, config.port, config.user, config.name) == (
        "db.internal",
        6543,
        "app",
        "aquiestoy",
    )
    assert config.sslmode == "disable"
    assert config.missing_variables() == []
    described = config.describe()
    assert described["DB_PASSWORD"] == "(set - h***)"
    assert "hunter22" not in str(described)


def test_blank_database_variable_counts_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DB_HOST", "   ")
    monkeypatch.setenv("DB_USER", "app")
    monkeypatch.setenv("DB_PASSWORD", "pw")
    monkeypatch.setenv("DB_NAME", "aquiestoy")

    assert DatabaseConfig(_env_file=None).missing_variables() == ["DB_HOST"]


def test_database_url_overrides_components(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite://")

    config = DatabaseConfig(_env_file=None)

    assert config.missing_variables() == []
    database = connect_database(config)
    try:
        assert isinstance(database, Database)
    finally:
        database.dispose()


def test_connect_without_variables_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        connect_database(DatabaseConfig(_env_file=None))

    assert excinfo.value.context == {
        "missing": ["DB_HOST", "DB_USER", "DB_PASSWORD", "DB_NAME"]
    }


def test_connect_to_unreachable_database_fails(tmp_path) -> None:
    missing_dir = tmp_path / "absent" / "app.db"
    config = DatabaseConfig(DATABASE_URL=f"sqlite:///{missing_dir}", _env_file=None)

    with pytest.raises(DatabaseUnavailableError) as excinfo:
        connect_database(config)

    assert excinfo.value.status == 503


def test_auth_defaults() -> None:
    config = AuthConfig(_env_file=None)

    assert config.jwt_secret == DEFAULT_JWT_SECRET
    assert config.uses_default_secret()
    assert config.jwt_ttl_seconds == 24 * 60 * 60
    assert config.bcrypt_rounds == 12


def test_blank_secret_falls_back_to_default() -> None:
    assert AuthConfig(JWT_SECRET="  ", _env_file=None).uses_default_secret()


def test_secret_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "a-real-secret-value-0123456789abcdef")

    config = AuthConfig(_env_file=None)

    assert not config.uses_default_secret()


def test_allowed_origins_are_comma_separated(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")

    config = SecurityConfig(_env_file=None)

    assert config.allowed_origins == ["https://a.example", "https://b.example"]


def test_app_defaults() -> None:
    config = AppConfig(auth=AuthConfig(_env_file=None), _env_file=None)

    assert config.host == "0.0.0.0"
    assert config.port == 8080
    assert config.app_env == "development"
    assert not config.is_production()


def test_production_with_default_secret_exits() -> None:
    with pytest.raises(SystemExit) as excinfo:
        AppConfig(APP_ENV="production", auth=AuthConfig(_env_file=None), _env_file=None)

    assert excinfo.value.code == 1


def test_production_with_secret_starts() -> None:
    config = AppConfig(
        APP_ENV="production",
        auth=AuthConfig(JWT_SECRET="a-real-secret-value-0123456789abcdef", _env_file=None),
        _env_file=None,
    )

    assert config.is_production()
