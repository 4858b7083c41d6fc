# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import timedelta

from student_records.domain.users.entities import SessionData, User
from student_records.domain.users.exceptions import (
    AccountDeactivatedError,
    InvalidCredentialsError,
)
from student_records.domain.users.repositories import SessionStore, UserRepository

DEFAULT_SESSION_TTL = timedelta(hours=24)


@dataclass(slots=True, frozen=True)
class LoginResult:
    session_id: str
    user: User


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionStore,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._session_ttl = session_ttl

    def execute(self, email: str, password: str, previous_session_id: str | None = None) -> LoginResult:
        user = self._users.find_by_email(email)
        if user is None:
            raise InvalidCredentialsError()
        if not user.is_active:
            raise AccountDeactivatedError()
        if not self._users.verify_password(user, password):
            raise InvalidCredentialsError()

        # A fresh id on every login; any session the client arrived with is dropped.
        if previous_session_id:
            self._sessions.destroy(previous_session_id)
        session_id = secrets.token_urlsafe(48)
        self._sessions.set(
            session_id,
            SessionData(user_id=user.id, username=user.username, role=user.role),
            self._session_ttl,
        )
        return LoginResult(session_id=session_id, user=user)
