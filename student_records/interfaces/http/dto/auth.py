from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from student_records.shared.errors.validation_types import ValidationErrorType

from .common import normalize_email, require, trimmed

USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")
EMAIL_MESSAGE = "Please enter a valid email address"


class SignupForm(BaseModel):
    model_config = ConfigDict(validate_default=True, validate_by_name=True, validate_by_alias=True)

    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = Field(default="", alias="confirmPassword")

    @field_validator("username", "email", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> str:
        return trimmed(value)

    @field_validator("password", "confirm_password", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not 3 <= len(value) <= 30:
            raise PydanticCustomError(
                ValidationErrorType.LENGTH,
                "Username must be between 3 and 30 characters",
                {"min_length": 3, "max_length": 30},
            )
        if not USERNAME_RE.match(value):
            raise PydanticCustomError(
                ValidationErrorType.PATTERN,
                "Username can only contain letters, numbers, and underscores",
                {"pattern": USERNAME_RE.pattern},
            )
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value, EMAIL_MESSAGE)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < 6:
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_TOO_SHORT,
                "Password must be at least 6 characters long",
                {"min_length": 6},
            )
        return value

    @field_validator("confirm_password")
    @classmethod
    def validate_confirmation(cls, value: str, info: ValidationInfo) -> str:
        password = info.data.get("password")
        # A rejected password already carries its own error.
        if password is not None and value != password:
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_MISMATCH,
                "Password confirmation does not match password",
                {},
            )
        return value


class LoginForm(BaseModel):
    model_config = ConfigDict(validate_default=True)

    email: str = ""
    password: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> str:
        return trimmed(value)

    @field_validator("password", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value, EMAIL_MESSAGE)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return require(value, "Password is required")
