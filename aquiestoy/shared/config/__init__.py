# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    DEFAULT_JWT_SECRET,
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    SecurityConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "AuthConfig",
    "DEFAULT_JWT_SECRET",
    "DatabaseConfig",
    "SecurityConfig",
    "load_config",
]
