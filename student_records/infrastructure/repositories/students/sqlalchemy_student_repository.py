# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import asc, desc, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query

from student_records.domain.students import (
    DepartmentCount,
    Student as DomainStudent,
    StudentData,
    StudentFilter,
    StudentRepository,
    StudentSort,
)
from student_records.infrastructure.db.models import Student
from student_records.infrastructure.db.session import session_scope
from student_records.shared.errors.base import UniqueConstraintViolation
from student_records.shared.logging import logger

_SORT_COLUMNS = {
    "name": Student.name,
    "rollNumber": Student.roll_number,
    "email": Student.email,
    "department": Student.department,
    "gpa": Student.gpa,
    "createdAt": Student.created_at,
}

# Constraint or column name as it appears in driver messages -> API field name.
_UNIQUE_FIELDS = (
    ("uq_students_roll_number", "rollNumber"),
    ("uq_students_email", "email"),
    ("students.roll_number", "rollNumber"),
    ("students.email", "email"),
    ("roll_number", "rollNumber"),
)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


def _to_domain(row: Student) -> DomainStudent:
    return DomainStudent(
        id=row.id,
        name=row.name,
        roll_number=row.roll_number,
        email=row.email,
        department=row.department,
        gpa=float(row.gpa),
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def _apply_filters(query: Query, filters: StudentFilter) -> Query:
    if filters.search_terms:
        # Any term matching any of the indexed text fields selects the row.
        query = query.filter(
            or_(
                *(
                    column.icontains(term, autoescape=True)
                    for term in filters.search_terms
                    for column in (Student.name, Student.email, Student.department)
                )
            )
        )
    if filters.department:
        query = query.filter(Student.department == filters.department)
    if filters.min_gpa is not None:
        query = query.filter(Student.gpa >= filters.min_gpa)
    if filters.max_gpa is not None:
        query = query.filter(Student.gpa <= filters.max_gpa)
    return query


class SqlAlchemyStudentRepository(StudentRepository):
    def create(self, data: StudentData) -> DomainStudent:
        try:
            with session_scope() as session:
                row = Student(
                    name=data.name,
                    roll_number=data.roll_number,
                    email=data.email,
                    department=data.department,
                    gpa=data.gpa,
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            raise self._unique_violation(exc, data) from exc

    def find_by_id(self, student_id: str) -> DomainStudent | None:
        with session_scope() as session:
            row = session.get(Student, student_id)
            return _to_domain(row) if row else None

    def find_many(
        self, filters: StudentFilter, sort: StudentSort, skip: int, limit: int
    ) -> list[DomainStudent]:
        column = _SORT_COLUMNS.get(sort.field, Student.created_at)
        direction = desc if sort.descending else asc
        with session_scope() as session:
            rows = (
                _apply_filters(session.query(Student), filters)
                .order_by(direction(column), direction(Student.id))
                .offset(skip)
                .limit(limit)
                .all()
            )
            return [_to_domain(row) for row in rows]

    def count(self, filters: StudentFilter) -> int:
        with session_scope() as session:
            return _apply_filters(session.query(Student), filters).count()

    def update_by_id(self, student_id: str, data: StudentData) -> DomainStudent | None:
        try:
            with session_scope() as session:
                row = session.get(Student, student_id)
                if row is None:
                    return None
                row.name = data.name
                row.roll_number = data.roll_number
                row.email = data.email
                row.department = data.department
                row.gpa = data.gpa
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            raise self._unique_violation(exc, data, exclude_id=student_id) from exc

    def delete_by_id(self, student_id: str) -> None:
        with session_scope() as session:
            deleted = session.query(Student).filter(Student.id == student_id).delete()
        if not deleted:
            logger.debug(f"students.delete: no row for id={student_id}")

    def count_all(self) -> int:
        with session_scope() as session:
            return session.query(func.count(Student.id)).scalar() or 0

    def top_departments(self, limit: int = 5) -> list[DepartmentCount]:
        with session_scope() as session:
            total = func.count(Student.id).label("total")
            rows = (
                session.query(Student.department, total)
                .group_by(Student.department)
                .order_by(desc(total), asc(Student.department))
                .limit(limit)
                .all()
            )
            return [DepartmentCount(name=name, count=int(count)) for name, count in rows]

    def average_gpa(self) -> float | None:
        with session_scope() as session:
            value = session.query(func.avg(Student.gpa)).scalar()
            return float(value) if value is not None else None

    def _unique_violation(
        self, exc: IntegrityError, data: StudentData, exclude_id: str | None = None
    ) -> UniqueConstraintViolation:
        message = str(exc.orig).lower()
        for needle, field in _UNIQUE_FIELDS:
            if needle in message:
                return UniqueConstraintViolation(field)
        return UniqueConstraintViolation(self._colliding_field(data, exclude_id))

    def _colliding_field(self, data: StudentData, exclude_id: str | None) -> str:
        # Some drivers omit the column from the message; ask the table instead.
        with session_scope() as session:
            query = session.query(Student.id).filter(
                Student.roll_number == data.roll_number.strip().lower()
            )
            if exclude_id:
                query = query.filter(Student.id != exclude_id)
            if query.first() is not None:
                return "rollNumber"
        return "email"
