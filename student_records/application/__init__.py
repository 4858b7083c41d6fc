# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.students import (
    CreateStudentUseCase,
    DeleteStudentUseCase,
    GetDashboardStatsUseCase,
    GetStudentUseCase,
    ListStudentsUseCase,
    UpdateStudentUseCase,
)

__all__ = [
    "CreateStudentUseCase",
    "DeleteStudentUseCase",
    "GetDashboardStatsUseCase",
    "GetStudentUseCase",
    "ListStudentsUseCase",
    "UpdateStudentUseCase",
]
