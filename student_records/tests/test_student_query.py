from __future__ import annotations

import pytest

from student_records.application.use_cases.students import Pagination, build_student_query
from student_records.application.use_cases.students.query import MAX_PAGE


def test_defaults() -> None:
    query = build_student_query({})

    assert query.page == 1
    assert query.limit == 10
    assert query.skip == 0
    assert query.sort.field == "createdAt"
    assert query.sort.descending is True
    assert query.filters.search_terms == ()
    assert query.filters.department is None
    assert query.filters.min_gpa is None
    assert query.filters.max_gpa is None
    assert query.echo == {
        "q": "",
        "department": "",
        "minGpa": "",
        "maxGpa": "",
        "sortBy": "createdAt",
        "order": "desc",
        "limit": 10,
    }


@pytest.mark.parametrize(
    ("page", "limit", "expected_page", "expected_limit"),
    [
        ("3", "20", 3, 20),
        ("0", "0", 1, 1),
        ("-5", "500", 1, 100),
        ("abc", "xyz", 1, 10),
        (" 2 ", " 5 ", 2, 5),
        ("99999999999999999999", "100", MAX_PAGE, 100),
    ],
)
def test_page_and_limit_are_clamped(
    page: str, limit: str, expected_page: int, expected_limit: int
) -> None:
    query = build_student_query({"page": page, "limit": limit})

    assert query.page == expected_page
    assert query.limit == expected_limit
    assert query.skip == (expected_page - 1) * expected_limit


def test_filters_are_trimmed_and_split() -> None:
    query = build_student_query(
        {"q": "  ada   physics ", "department": " Physics ", "minGpa": "2.5", "maxGpa": "3.5"}
    )

    assert query.filters.search_terms == ("ada", "physics")
    assert query.filters.department == "Physics"
    assert query.filters.min_gpa == 2.5
    assert query.filters.max_gpa == 3.5
    assert query.echo["q"] == "ada   physics"
    assert query.echo["minGpa"] == 2.5


@pytest.mark.parametrize("raw", ["", "abc", "nan", "inf", "-inf"])
def test_unparseable_gpa_bounds_are_ignored(raw: str) -> None:
    query = build_student_query({"minGpa": raw, "maxGpa": raw})

    assert query.filters.min_gpa is None
    assert query.filters.max_gpa is None


def test_unknown_sort_falls_back_to_created_at_descending() -> None:
    query = build_student_query({"sortBy": "password", "order": "sideways"})

    assert query.sort.field == "createdAt"
    assert query.sort.descending is True


def test_ascending_sort_on_allowed_field() -> None:
    query = build_student_query({"sortBy": "gpa", "order": "asc"})

    assert query.sort.field == "gpa"
    assert query.sort.descending is False
    assert query.echo["order"] == "asc"


@pytest.mark.parametrize(
    ("total", "limit", "total_pages"),
    [(0, 10, 1), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 10, 3), (100, 100, 1)],
)
def test_pagination_total_pages(total: int, limit: int, total_pages: int) -> None:
    pagination = Pagination.from_total(page=1, limit=limit, total=total)

    assert pagination.total_pages == total_pages


def test_pagination_navigation_flags() -> None:
    middle = Pagination.from_total(page=2, limit=10, total=25)
    beyond = Pagination.from_total(page=4, limit=10, total=25)

    assert middle.has_prev and middle.has_next
    assert beyond.has_prev and not beyond.has_next
