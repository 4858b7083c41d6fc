# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from student_records.domain.students import GPA_MAX, GPA_MIN, StudentData
from student_records.shared.errors.base import InvalidIdentifierError
from student_records.shared.errors.validation_types import ValidationErrorType

from .common import normalize_email, require, trimmed

CUSTOM_DEPARTMENT = "custom"
ROLL_NUMBER_RE = re.compile(r"^[a-z0-9-]+$", re.IGNORECASE)
STUDENT_ID_RE = re.compile(r"^[0-9a-f]{32}$")

GPA_MESSAGE = "GPA must be between 0.0 and 4.0"


def parse_student_id(value: str) -> str:
    if not STUDENT_ID_RE.match(value or ""):
        raise InvalidIdentifierError(value)
    return value


class StudentForm(BaseModel):
    """Create/edit form. ``department == "custom"`` defers to ``customDepartment``."""

    model_config = ConfigDict(validate_default=True, validate_by_name=True, validate_by_alias=True)

    name: str = ""
    roll_number: str = Field(default="", alias="rollNumber")
    email: str = ""
    # Declared before ``department`` so its validator can read it.
    custom_department: str = Field(default="", alias="customDepartment")
    department: str = ""
    gpa: float | None = None

    @field_validator("name", "roll_number", "email", "custom_department", "department", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> str:
        return trimmed(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        require(value, "Name is required")
        if not 2 <= len(value) <= 100:
            raise PydanticCustomError(
                ValidationErrorType.LENGTH,
                "Name must be between 2 and 100 characters",
                {"min_length": 2, "max_length": 100},
            )
        return value

    @field_validator("roll_number")
    @classmethod
    def validate_roll_number(cls, value: str) -> str:
        require(value, "Roll number is required")
        if not ROLL_NUMBER_RE.match(value):
            raise PydanticCustomError(
                ValidationErrorType.PATTERN,
                "Roll number must be alphanumeric",
                {"pattern": ROLL_NUMBER_RE.pattern},
            )
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value, "Valid email is required")

    @field_validator("department")
    @classmethod
    def validate_department(cls, value: str, info: ValidationInfo) -> str:
        require(value, "Department is required")
        if value != CUSTOM_DEPARTMENT:
            if len(value) > 100:
                raise PydanticCustomError(
                    ValidationErrorType.LENGTH,
                    "Department must be at most 100 characters",
                    {"max_length": 100},
                )
            return value
        custom = info.data.get("custom_department", "")
        if not custom:
            raise PydanticCustomError(
                ValidationErrorType.CUSTOM_DEPARTMENT,
                'Custom department name is required when selecting "Custom Department"',
                {},
            )
        if len(custom) < 2:
            raise PydanticCustomError(
                ValidationErrorType.CUSTOM_DEPARTMENT,
                "Custom department name must be at least 2 characters long",
                {"min_length": 2},
            )
        if len(custom) > 100:
            raise PydanticCustomError(
                ValidationErrorType.CUSTOM_DEPARTMENT,
                "Custom department name must be at most 100 characters long",
                {"max_length": 100},
            )
        return custom

    @field_validator("gpa", mode="before")
    @classmethod
    def validate_gpa(cls, value: Any) -> float:
        try:
            gpa = float(trimmed(value)) if not isinstance(value, bool) else math.nan
        except ValueError:
            gpa = math.nan
        if not math.isfinite(gpa) or not GPA_MIN <= gpa <= GPA_MAX:
            raise PydanticCustomError(
                ValidationErrorType.GPA_RANGE,
                GPA_MESSAGE,
                {"min": GPA_MIN, "max": GPA_MAX},
            )
        return gpa

    def to_student_data(self) -> StudentData:
        return StudentData(
            name=self.name,
            roll_number=self.roll_number,
            email=self.email,
            department=self.department,
            gpa=float(self.gpa if self.gpa is not None else 0.0),
        )


__all__ = ["CUSTOM_DEPARTMENT", "StudentForm", "parse_student_id"]
