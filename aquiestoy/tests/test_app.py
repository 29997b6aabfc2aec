from __future__ import annotations

import pytest
from flask import Flask
from sqlalchemy.exc import OperationalError

from aquiestoy import app as app_module
from aquiestoy.infrastructure.db import Database
from aquiestoy.infrastructure.health import check_database
from aquiestoy.shared.config import AppConfig
from aquiestoy.shared.errors.base import ConfigurationError


@pytest.fixture()
def logging_calls(monkeypatch: pytest.MonkeyPatch) -> list[tuple]:
    calls: list[tuple] = []
    monkeypatch.setattr(app_module, "setup_logging", lambda *a, **kw: calls.append((a, kw)))
    return calls


def test_main_configures_logging_once(
    monkeypatch: pytest.MonkeyPatch,
    logging_calls: list[tuple],
    app_config: AppConfig,
    database: Database,
) -> None:
    runs: list[dict] = []
    monkeypatch.setattr(app_module, "load_config", lambda: app_config)
    monkeypatch.setattr(app_module, "connect_database", lambda config: database)
    monkeypatch.setattr(Flask, "run", lambda self, **kwargs: runs.append(kwargs))

    app_module.main()

    assert len(logging_calls) == 1
    assert runs == [{"host": app_config.host, "port": app_config.port}]


def test_create_app_with_config_leaves_logging_alone(
    logging_calls: list[tuple], app_config: AppConfig, database: Database
) -> None:
    app_module.create_app(app_config, database)

    assert logging_calls == []


def test_main_exits_when_database_is_not_configured(
    monkeypatch: pytest.MonkeyPatch, logging_calls: list[tuple], app_config: AppConfig
) -> None:
    def missing(config):
        raise ConfigurationError("not configured", missing=["DB_HOST"])

    monkeypatch.setattr(app_module, "load_config", lambda: app_config)
    monkeypatch.setattr(app_module, "connect_database", missing)

    with pytest.raises(SystemExit) as excinfo:
        app_module.main()

    assert excinfo.value.code == 1


def test_check_database_returns_nothing_when_reachable(database: Database) -> None:
    assert check_database(database) is None


def test_check_database_propagates_driver_errors(
    monkeypatch: pytest.MonkeyPatch, database: Database
) -> None:
    def unreachable() -> None:
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    monkeypatch.setattr(database, "ping", unreachable)

    with pytest.raises(OperationalError):
        check_database(database)
