# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .entities import DEFAULT_SORT_FIELD, DepartmentCount, Student, StudentData


@dataclass(slots=True, frozen=True)
class StudentFilter:
    """Conditions combined with AND; every attribute left unset is ignored."""

    search_terms: tuple[str, ...] = ()
    department: str | None = None
    min_gpa: float | None = None
    max_gpa: float | None = None


@dataclass(slots=True, frozen=True)
class StudentSort:
    field: str = DEFAULT_SORT_FIELD
    descending: bool = True


class StudentRepository(Protocol):
    def create(self, data: StudentData) -> Student: ...
    def find_by_id(self, student_id: str) -> Student | None: ...
    def find_many(
        self, filters: StudentFilter, sort: StudentSort, skip: int, limit: int
    ) -> list[Student]: ...
    def count(self, filters: StudentFilter) -> int: ...
    def update_by_id(self, student_id: str, data: StudentData) -> Student | None: ...
    def delete_by_id(self, student_id: str) -> None: ...
    def count_all(self) -> int: ...
    def top_departments(self, limit: int = 5) -> list[DepartmentCount]: ...
    def average_gpa(self) -> float | None: ...
