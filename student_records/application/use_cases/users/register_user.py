# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from student_records.domain.users.entities import NewUser, User
from student_records.domain.users.exceptions import UserAlreadyExistsError
from student_records.domain.users.repositories import UserRepository
from student_records.shared.errors.base import UniqueConstraintViolation


class RegisterUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, username: str, email: str, password: str) -> User:
        existing = self._users.find_by_email_or_username(email, username)
        if existing is not None:
            # Email is reported first when both collide.
            field = "email" if existing.email == email else "username"
            raise UserAlreadyExistsError(field)
        try:
            return self._users.add(NewUser(username=username, email=email, password=password))
        except UniqueConstraintViolation as exc:
            # Lost a race with a concurrent signup for the same name or address.
            raise UserAlreadyExistsError(exc.field) from exc
