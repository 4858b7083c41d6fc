# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    DEFAULT_SORT_FIELD,
    GPA_MAX,
    GPA_MIN,
    SORTABLE_FIELDS,
    DashboardStats,
    DepartmentCount,
    Student,
    StudentData,
)
from .exceptions import StudentNotFoundError
from .repositories import StudentFilter, StudentRepository, StudentSort

__all__ = [
    "DEFAULT_SORT_FIELD",
    "GPA_MAX",
    "GPA_MIN",
    "SORTABLE_FIELDS",
    "DashboardStats",
    "DepartmentCount",
    "Student",
    "StudentData",
    "StudentFilter",
    "StudentNotFoundError",
    "StudentRepository",
    "StudentSort",
]
