# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from student_records.shared.errors.base import DomainError

EMAIL_TAKEN_MESSAGE = "Email already registered"
USERNAME_TAKEN_MESSAGE = "Username already taken"


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT

    def __init__(self, field: str) -> None:
        message = EMAIL_TAKEN_MESSAGE if field == "email" else USERNAME_TAKEN_MESSAGE
        super().__init__(context={"field": field}, message=message)


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid email or password"


class AccountDeactivatedError(DomainError):
    code = "account_deactivated"
    status = HTTPStatus.UNAUTHORIZED
    message = "Account is deactivated. Please contact administrator."
