# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES: tuple[str, ...] = (ROLE_ADMIN, ROLE_USER)


@dataclass(slots=True, frozen=True)
class User:

    id: str
    username: str
    email: str
    password_hash: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    def to_public_dict(self) -> dict[str, Any]:
        """Serializable view of the account; the password hash is never included."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username} role={self.role}>"


@dataclass(slots=True, frozen=True)
class NewUser:
    username: str
    email: str
    password: str
    role: str = ROLE_USER
    is_active: bool = True

    def __repr__(self) -> str:
        return f"<NewUser username={self.username} role={self.role}>"


@dataclass(slots=True, frozen=True)
class UserChanges:
    username: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None
    is_active: bool | None = None


@dataclass(slots=True, frozen=True)
class SessionData:
    """What an authenticated session remembers about its user."""

    user_id: str
    username: str
    role: str
