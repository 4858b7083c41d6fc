# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Translate list-page query parameters into a store query.

Every parameter is optional and forgiving: garbage falls back to the default
instead of producing an error, so a hand-edited URL always renders a page.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from student_records.domain.students import (
    DEFAULT_SORT_FIELD,
    SORTABLE_FIELDS,
    StudentFilter,
    StudentSort,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Keeps OFFSET inside a signed 64-bit integer for any limit.
MAX_PAGE = 1_000_000_000


@dataclass(slots=True, frozen=True)
class Pagination:
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def from_total(cls, *, page: int, limit: int, total: int) -> Pagination:
        total_pages = max(1, math.ceil(total / limit)) if limit else 1
        return cls(page=page, limit=limit, total=total, total_pages=total_pages)

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


@dataclass(slots=True, frozen=True)
class StudentQuery:
    filters: StudentFilter
    sort: StudentSort
    page: int
    limit: int
    echo: dict[str, Any]

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def _parse_int(raw: Any, default: int) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


def _parse_float(raw: Any) -> float | None:
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _text(raw: Any) -> str:
    return str(raw).strip() if raw is not None else ""


def build_student_query(params: Mapping[str, Any]) -> StudentQuery:
    page = min(MAX_PAGE, max(DEFAULT_PAGE, _parse_int(params.get("page"), DEFAULT_PAGE)))
    limit = min(MAX_LIMIT, max(1, _parse_int(params.get("limit"), DEFAULT_LIMIT)))

    q = _text(params.get("q"))
    department = _text(params.get("department"))
    min_gpa = _parse_float(params.get("minGpa"))
    max_gpa = _parse_float(params.get("maxGpa"))

    sort_by = _text(params.get("sortBy"))
    if sort_by not in SORTABLE_FIELDS:
        sort_by = DEFAULT_SORT_FIELD
    order = "asc" if _text(params.get("order")) == "asc" else "desc"

    filters = StudentFilter(
        search_terms=tuple(q.split()),
        department=department or None,
        min_gpa=min_gpa,
        max_gpa=max_gpa,
    )
    echo = {
        "q": q,
        "department": department,
        "minGpa": "" if min_gpa is None else min_gpa,
        "maxGpa": "" if max_gpa is None else max_gpa,
        "sortBy": sort_by,
        "order": order,
        "limit": limit,
    }
    return StudentQuery(
        filters=filters,
        sort=StudentSort(field=sort_by, descending=order == "desc"),
        page=page,
        limit=limit,
        echo=echo,
    )


__all__ = ["Pagination", "StudentQuery", "build_student_query"]
