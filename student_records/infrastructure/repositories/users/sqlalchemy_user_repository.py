# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy import case, or_
from sqlalchemy.exc import IntegrityError

from student_records.domain.exceptions import StoreValidationError
from student_records.domain.users.entities import NewUser, SessionData, UserChanges
from student_records.domain.users.entities import User as DomainUser
from student_records.domain.users.repositories import PasswordHasher, SessionStore, UserRepository
from student_records.infrastructure.db.models import User, UserSession
from student_records.infrastructure.db.session import session_scope
from student_records.shared.errors.base import UniqueConstraintViolation

MIN_PASSWORD_LENGTH = 6


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        role=row.role,
        is_active=bool(row.is_active),
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def _check_plain_password(password: str | None) -> str:
    if not password:
        raise StoreValidationError("Password is required", field="password")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise StoreValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password"
        )
    return password


def _unique_field(exc: IntegrityError) -> str:
    message = str(exc.orig).lower()
    return "username" if "username" in message else "email"


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, password_hasher: PasswordHasher) -> None:
        self._password_hasher = password_hasher

    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.query(User).filter(User.email == email.strip().lower()).first()
            if not row:
                return None
            return _to_domain(row)

    def find_by_id(self, user_id: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.get(User, user_id)
            if not row:
                return None
            return _to_domain(row)

    def find_by_email_or_username(self, email: str, username: str) -> DomainUser | None:
        email = email.strip().lower()
        with session_scope() as session:
            row = (
                session.query(User)
                .filter(or_(User.email == email, User.username == username))
                # An email match wins over a username match held by another account.
                .order_by(case((User.email == email, 0), else_=1))
                .first()
            )
            if not row:
                return None
            return _to_domain(row)

    def add(self, user: NewUser) -> DomainUser:
        password_hash = self._password_hasher.hash(_check_plain_password(user.password))
        try:
            with session_scope() as session:
                row = User(
                    username=user.username,
                    email=user.email,
                    password_hash=password_hash,
                    role=user.role,
                    is_active=user.is_active,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            raise UniqueConstraintViolation(_unique_field(exc)) from exc

    def update(self, user_id: str, changes: UserChanges) -> DomainUser | None:
        # Hash outside the transaction; only a changed password is re-hashed.
        new_hash = None
        if changes.password is not None:
            new_hash = self._password_hasher.hash(_check_plain_password(changes.password))
        try:
            with session_scope() as session:
                row = session.get(User, user_id)
                if row is None:
                    return None
                if changes.username is not None:
                    row.username = changes.username
                if changes.email is not None:
                    row.email = changes.email
                if new_hash is not None:
                    row.password_hash = new_hash
                if changes.role is not None:
                    row.role = changes.role
                if changes.is_active is not None:
                    row.is_active = changes.is_active
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            raise UniqueConstraintViolation(_unique_field(exc)) from exc

    def verify_password(self, user: DomainUser, password: str) -> bool:
        return self._password_hasher.verify(password, user.password_hash)


class SqlAlchemySessionStore(SessionStore):
    """Server-side sessions in the ``sessions`` table, expiring after their TTL."""

    def get(self, session_id: str) -> SessionData | None:
        with session_scope() as session:
            row = session.get(UserSession, session_id)
            if row is None:
                return None
            if _as_utc(row.expires_at) <= datetime.now(UTC):
                session.delete(row)
                return None
            return SessionData(user_id=row.user_id, username=row.username, role=row.role)

    def set(self, session_id: str, data: SessionData, ttl: timedelta) -> None:
        expires_at = datetime.now(UTC) + ttl
        with session_scope() as session:
            row = session.get(UserSession, session_id)
            if row is None:
                row = UserSession(id=session_id)
                session.add(row)
            row.user_id = data.user_id
            row.username = data.username
            row.role = data.role
            row.expires_at = expires_at

    def destroy(self, session_id: str) -> None:
        with session_scope() as session:
            session.query(UserSession).filter(UserSession.id == session_id).delete()

    def purge_expired(self) -> int:
        with session_scope() as session:
            return (
                session.query(UserSession)
                .filter(UserSession.expires_at <= datetime.now(UTC))
                .delete()
            )
