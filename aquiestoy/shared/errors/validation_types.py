# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations


class ValidationErrorType:
    MISSING = "missing"
    NAME_BLANK = "name_blank"
    PASSWORD_TOO_LONG = "password_too_long"


__all__ = ["ValidationErrorType"]
