# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from aquiestoy.infrastructure.db import Database


def check_database(database: Database) -> None:
    """Raise the driver's ``SQLAlchemyError`` when the database does not answer."""
    database.ping()


__all__ = ["check_database"]
