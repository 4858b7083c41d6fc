# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import math
import re
import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, Float, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from student_records.domain.exceptions import StoreValidationError
from student_records.domain.students.entities import GPA_MAX, GPA_MIN
from student_records.domain.users.entities import ROLE_USER, ROLES
from student_records.infrastructure.db.session import Base

ROLL_NUMBER_RE = re.compile(r"^[a-z0-9-]+$", re.IGNORECASE)
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _required_text(value, field: str, label: str) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise StoreValidationError(f"{label} is required", field=field)
    return text


def _check_length(text: str, field: str, label: str, minimum: int, maximum: int) -> str:
    if len(text) < minimum:
        raise StoreValidationError(
            f"{label} must be at least {minimum} characters", field=field
        )
    if len(text) > maximum:
        raise StoreValidationError(
            f"{label} must be at most {maximum} characters", field=field
        )
    return text


def _normalized_email(value) -> str:
    email = _required_text(value, "email", "Email").lower()
    if not EMAIL_RE.match(email):
        raise StoreValidationError("Invalid email address", field="email")
    return email


class Student(Base):
    __tablename__ = "students"
    __table_args__ = (
        UniqueConstraint("roll_number", name="uq_students_roll_number"),
        UniqueConstraint("email", name="uq_students_email"),
        Index("ix_students_department", "department"),
        Index("ix_students_gpa", "gpa"),
    )
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    roll_number: Mapped[str] = mapped_column(String(64), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    department: Mapped[str] = mapped_column(String(100), nullable=False)
    gpa: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    @validates("name")
    def _validate_name(self, _key, value):
        name = _required_text(value, "name", "Name")
        return _check_length(name, "name", "Name", 2, 100)

    @validates("roll_number")
    def _validate_roll_number(self, _key, value):
        roll = _required_text(value, "rollNumber", "Roll number").lower()
        if not ROLL_NUMBER_RE.match(roll):
            raise StoreValidationError("Roll number must be alphanumeric", field="rollNumber")
        return roll

    @validates("email")
    def _validate_email(self, _key, value):
        return _normalized_email(value)

    @validates("department")
    def _validate_department(self, _key, value):
        department = _required_text(value, "department", "Department")
        return _check_length(department, "department", "Department", 1, 100)

    @validates("gpa")
    def _validate_gpa(self, _key, value):
        if value is None or isinstance(value, bool):
            raise StoreValidationError("GPA is required", field="gpa")
        try:
            gpa = float(value)
        except (TypeError, ValueError):
            raise StoreValidationError("GPA must be a number", field="gpa") from None
        if math.isnan(gpa):
            raise StoreValidationError("GPA must be a number", field="gpa")
        if gpa < GPA_MIN:
            raise StoreValidationError("GPA cannot be less than 0.0", field="gpa")
        if gpa > GPA_MAX:
            raise StoreValidationError("GPA cannot be greater than 4.0", field="gpa")
        return gpa


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    username: Mapped[str] = mapped_column(String(30), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ROLE_USER, server_default=ROLE_USER
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="1"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    @validates("username")
    def _validate_username(self, _key, value):
        username = _required_text(value, "username", "Username")
        _check_length(username, "username", "Username", 3, 30)
        if not USERNAME_RE.match(username):
            raise StoreValidationError(
                "Username can only contain letters, numbers, and underscores",
                field="username",
            )
        return username

    @validates("email")
    def _validate_email(self, _key, value):
        return _normalized_email(value)

    @validates("password_hash")
    def _validate_password_hash(self, _key, value):
        if not value:
            raise StoreValidationError("Password is required", field="password")
        return value

    @validates("role")
    def _validate_role(self, _key, value):
        if value not in ROLES:
            raise StoreValidationError(
                f"Role must be one of: {', '.join(ROLES)}", field="role"
            )
        return value


class UserSession(Base):
    __tablename__ = "sessions"
    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(32), index=True)
    username: Mapped[str] = mapped_column(String(30))
    role: Mapped[str] = mapped_column(String(16))
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
