# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import contextvars
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from student_records.domain.students import Student, StudentRepository
from student_records.shared.logging import logger

from .query import Pagination, StudentQuery


@dataclass(slots=True, frozen=True)
class StudentPage:
    students: list[Student]
    pagination: Pagination


class ListStudentsUseCase:
    def __init__(self, *, students: StudentRepository, max_workers: int = 2) -> None:
        self._students = students
        self._max_workers = max_workers

    def execute(self, query: StudentQuery) -> StudentPage:
        # Count and page are independent reads; each repository call opens its
        # own session, so the two workers never share one.
        with ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="students-list"
        ) as pool:
            total_future = pool.submit(
                contextvars.copy_context().run, self._students.count, query.filters
            )
            rows_future = pool.submit(
                contextvars.copy_context().run,
                self._students.find_many,
                query.filters,
                query.sort,
                query.skip,
                query.limit,
            )
            total = total_future.result()
            rows = rows_future.result()

        pagination = Pagination.from_total(page=query.page, limit=query.limit, total=total)
        logger.debug(
            f"students.list: page={pagination.page} limit={pagination.limit} "
            f"total={total} returned={len(rows)}"
        )
        return StudentPage(students=rows, pagination=pagination)


__all__ = ["ListStudentsUseCase", "StudentPage"]
