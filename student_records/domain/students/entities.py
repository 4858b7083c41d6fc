# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

GPA_MIN = 0.0
GPA_MAX = 4.0

SORTABLE_FIELDS: tuple[str, ...] = (
    "name",
    "rollNumber",
    "email",
    "department",
    "gpa",
    "createdAt",
)
DEFAULT_SORT_FIELD = "createdAt"


@dataclass(slots=True, frozen=True)
class StudentData:
    """Writable student fields, as accepted by create and full-replace update."""

    name: str
    roll_number: str
    email: str
    department: str
    gpa: float


@dataclass(slots=True, frozen=True)
class Student:

    id: str
    name: str
    roll_number: str
    email: str
    department: str
    gpa: float
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rollNumber": self.roll_number,
            "email": self.email,
            "department": self.department,
            "gpa": self.gpa,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(slots=True, frozen=True)
class DepartmentCount:
    name: str
    count: int


@dataclass(slots=True, frozen=True)
class DashboardStats:
    total: int
    top_departments: list[DepartmentCount]
    avg_gpa: float | None
