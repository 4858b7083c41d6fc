# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from student_records.domain.students import (
    Student,
    StudentData,
    StudentNotFoundError,
    StudentRepository,
)


class CreateStudentUseCase:
    def __init__(self, *, students: StudentRepository) -> None:
        self._students = students

    def execute(self, data: StudentData) -> Student:
        return self._students.create(data)


class GetStudentUseCase:
    def __init__(self, *, students: StudentRepository) -> None:
        self._students = students

    def execute(self, student_id: str) -> Student:
        student = self._students.find_by_id(student_id)
        if student is None:
            raise StudentNotFoundError()
        return student


class UpdateStudentUseCase:
    """Full replace: every writable field is overwritten and re-validated."""

    def __init__(self, *, students: StudentRepository) -> None:
        self._students = students

    def execute(self, student_id: str, data: StudentData) -> Student:
        updated = self._students.update_by_id(student_id, data)
        if updated is None:
            raise StudentNotFoundError()
        return updated


class DeleteStudentUseCase:
    def __init__(self, *, students: StudentRepository) -> None:
        self._students = students

    def execute(self, student_id: str) -> None:
        self._students.delete_by_id(student_id)


__all__ = [
    "CreateStudentUseCase",
    "DeleteStudentUseCase",
    "GetStudentUseCase",
    "UpdateStudentUseCase",
]
