# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from .entities import NewUser, SessionData, User, UserChanges


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: str) -> User | None: ...
    def find_by_email_or_username(self, email: str, username: str) -> User | None: ...
    def add(self, user: NewUser) -> User: ...
    def update(self, user_id: str, changes: UserChanges) -> User | None: ...
    def verify_password(self, user: User, password: str) -> bool: ...


class SessionStore(Protocol):
    def get(self, session_id: str) -> SessionData | None: ...
    def set(self, session_id: str, data: SessionData, ttl: timedelta) -> None: ...
    def destroy(self, session_id: str) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
