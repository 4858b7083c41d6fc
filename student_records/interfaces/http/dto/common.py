# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic_core import PydanticCustomError

from student_records.shared.errors.validation_types import ValidationErrorType


def trimmed(value: Any) -> str:
    """Form fields arrive as strings or not at all; absent becomes empty."""
    if value is None:
        return ""
    return str(value).strip()


def normalize_email(value: str, message: str) -> str:
    if not value:
        raise PydanticCustomError(ValidationErrorType.EMAIL_INVALID, message, {})
    try:
        result = validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError(ValidationErrorType.EMAIL_INVALID, message, {}) from None
    return result.normalized.lower()


def require(value: str, message: str) -> str:
    if not value:
        raise PydanticCustomError(ValidationErrorType.MISSING, message, {})
    return value
