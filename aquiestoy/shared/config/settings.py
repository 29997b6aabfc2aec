# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_JWT_SECRET = "default-secret-change-in-production"

_REQUIRED_DATABASE_VARIABLES = {
    "host": "DB_HOST",
    "user": "DB_USER",
    "password": "DB_PASSWORD",
    "name": "DB_NAME",
}


def _settings_config() -> SettingsConfigDict:
    # Aliases only: field names such as ``user`` or ``name`` would pick up unrelated
    # shell variables (USER, NAME).
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
    )


class DatabaseConfig(BaseSettings):
    host: str | None = Field(None, alias="DB_HOST")
    port: int = Field(5432, ge=1, le=65535, alias="DB_PORT")
    user: str | None = Field(None, alias="DB_USER")
    password: str | None = Field(None, alias="DB_PASSWORD")
    name: str | None = Field(None, alias="DB_NAME")
    sslmode: str = Field("require", alias="DB_SSLMODE")
    # Full SQLAlchemy URL; takes precedence over the DB_* variables when set.
    url: str | None = Field(None, alias="DATABASE_URL")

    model_config = _settings_config()

    @field_validator("host", "user", "password", "name", "url", mode="before")
    @classmethod
    def _blank_as_missing(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def missing_variables(self) -> list[str]:
        if self.url:
            return []
        return [env for attr, env in _REQUIRED_DATABASE_VARIABLES.items() if not getattr(self, attr)]

    def describe(self) -> dict[str, str]:
        if self.password:
            masked = f"(set - {self.password[0]}***)"
        else:
            masked = "(empty)"
        return {
            "DB_HOST": self.host or "",
            "DB_PORT": str(self.port),
            "DB_USER": self.user or "",
            "DB_NAME": self.name or "",
            "DB_SSLMODE": self.sslmode,
            "DB_PASSWORD": masked,
            "DATABASE_URL": "(set)" if self.url else "(unset)",
        }


class AuthConfig(BaseSettings):
    jwt_secret: str = Field(DEFAULT_JWT_SECRET, alias="JWT_SECRET")
    jwt_ttl_seconds: int = Field(24 * 60 * 60, ge=1, alias="JWT_TTL_SECONDS")
    bcrypt_rounds: int = Field(12, ge=4, le=31, alias="BCRYPT_ROUNDS")

    model_config = _settings_config()

    @field_validator("jwt_secret", mode="before")
    @classmethod
    def _fallback_secret(cls, value: str | None) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_JWT_SECRET
        return str(value)

    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


class SecurityConfig(BaseSettings):
    # Comma separated in the environment, not JSON.
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _settings_config()

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8080, ge=1, le=65535, alias="PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
        validate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @field_validator("log_level", mode="after")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.auth.uses_default_secret():
            print(
                "\n❌ CRITICAL SECURITY ERROR: JWT_SECRET is not set in production!\n"
                "   Tokens would be signed with the public default secret.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if "*" in self.security.allowed_origins:
            print(
                "\n⚠️  PRODUCTION SECURITY WARNING: CORS allows wildcard (*) origins\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "AuthConfig",
    "DEFAULT_JWT_SECRET",
    "DatabaseConfig",
    "SecurityConfig",
    "load_config",
]
