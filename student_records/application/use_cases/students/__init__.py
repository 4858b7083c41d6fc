# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .get_dashboard_stats import GetDashboardStatsUseCase
from .list_students import ListStudentsUseCase, StudentPage
from .manage_students import (
    CreateStudentUseCase,
    DeleteStudentUseCase,
    GetStudentUseCase,
    UpdateStudentUseCase,
)
from .query import Pagination, StudentQuery, build_student_query

__all__ = [
    "CreateStudentUseCase",
    "DeleteStudentUseCase",
    "GetDashboardStatsUseCase",
    "GetStudentUseCase",
    "ListStudentsUseCase",
    "Pagination",
    "StudentPage",
    "StudentQuery",
    "UpdateStudentUseCase",
    "build_student_query",
]
