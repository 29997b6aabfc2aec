# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import URL, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from aquiestoy.shared.config import DatabaseConfig
from aquiestoy.shared.errors.base import ConfigurationError, DatabaseUnavailableError
from aquiestoy.shared.logging import logger

POOL_SIZE = 10
MAX_OVERFLOW = 90  # 100 open connections in total
POOL_RECYCLE_SECONDS = 3600
CONNECT_TIMEOUT_SECONDS = 30


class Base(DeclarativeBase):
    pass


def _postgres_url(config: DatabaseConfig) -> URL:
    return URL.create(
        "postgresql+psycopg",
        username=config.user,
        password=config.password,
        host=config.host,
        port=config.port,
        database=config.name,
        query={
            "sslmode": config.sslmode,
            "connect_timeout": str(CONNECT_TIMEOUT_SECONDS),
            "options": "-c TimeZone=UTC",
        },
    )


class Database:
    """Engine plus session factory; built once at startup and injected."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = sessionmaker(
            bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
        )

    @classmethod
    def from_url(cls, url: str | URL, **engine_options: Any) -> Database:
        if str(url).startswith("sqlite"):
            engine_options.setdefault("connect_args", {"check_same_thread": False})
        return cls(create_engine(url, pool_pre_ping=True, **engine_options))

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> Database:
        missing = config.missing_variables()
        if missing:
            raise ConfigurationError(
                "Database connection variables are not configured", missing=missing
            )
        if config.url:
            return cls.from_url(config.url)
        return cls.from_url(
            _postgres_url(config),
            pool_size=POOL_SIZE,
            max_overflow=MAX_OVERFLOW,
            pool_recycle=POOL_RECYCLE_SECONDS,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        session = self._session_factory()
        logger.debug("db.session: opened session")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed session")
        except Exception as exc:
            logger.debug(f"db.session: rolling back after {type(exc).__name__}")
            session.rollback()
            raise
        finally:
            session.close()

    def create_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ensured")

    def ping(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()


def connect_database(config: DatabaseConfig) -> Database:
    """Build the database handle from configuration and verify it answers."""
    database = Database.from_config(config)
    target = "DATABASE_URL" if config.url else f"{config.host}:{config.port}/{config.name}"
    logger.info(f"db.connect: connecting to {target}")
    try:
        database.ping()
    except OperationalError as exc:
        database.dispose()
        raise DatabaseUnavailableError(f"Could not connect to {target}") from exc
    logger.info("db.connect: connection verified")
    return database
