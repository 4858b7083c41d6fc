# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from student_records.shared.errors.base import DomainError


class StudentNotFoundError(DomainError):
    code = "student_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Student not found"
