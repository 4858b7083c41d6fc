# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from student_records.domain.students import DashboardStats, StudentRepository

TOP_DEPARTMENTS = 5


class GetDashboardStatsUseCase:
    def __init__(self, *, students: StudentRepository) -> None:
        self._students = students

    def execute(self) -> DashboardStats:
        avg = self._students.average_gpa()
        return DashboardStats(
            total=self._students.count_all(),
            top_departments=self._students.top_departments(TOP_DEPARTMENTS),
            avg_gpa=None if avg is None else round(avg, 2),
        )


__all__ = ["GetDashboardStatsUseCase"]
