# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum


class ValidationErrorType(StrEnum):
    """Error type tags carried by form validation failures."""

    MISSING = "missing"
    LENGTH = "length"
    PATTERN = "pattern"
    EMAIL_INVALID = "email_invalid"
    GPA_RANGE = "gpa_range"
    CUSTOM_DEPARTMENT = "custom_department"
    PASSWORD_TOO_SHORT = "password_too_short"
    PASSWORD_MISMATCH = "password_mismatch"


__all__ = ["ValidationErrorType"]
