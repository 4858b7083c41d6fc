# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Request, Response, g, request
from itsdangerous import BadSignature, SignatureExpired, TimestampSigner

from student_records.domain.users.entities import SessionData
from student_records.domain.users.repositories import SessionStore
from student_records.shared.config import AppConfig
from student_records.shared.logging import logger

_SALT = "student-records.session"


class SessionCookie:
    """Signs the opaque session id carried in the browser cookie."""

    def __init__(self, config: AppConfig) -> None:
        self._signer = TimestampSigner(config.secret_key, salt=_SALT)
        self._name = config.security.session_cookie_name
        self._max_age = config.security.session_lifetime
        self._secure = config.security.cookie_secure
        self._samesite = config.security.cookie_samesite

    @property
    def name(self) -> str:
        return self._name

    def read(self, req: Request) -> str | None:
        raw = req.cookies.get(self._name)
        if not raw:
            return None
        try:
            return self._signer.unsign(raw, max_age=self._max_age).decode("utf-8")
        except SignatureExpired:
            logger.debug("session.cookie: expired signature")
        except BadSignature:
            logger.warning(f"session.cookie: bad signature on {req.method} {req.path}")
        return None

    def write(self, response: Response, session_id: str) -> None:
        response.set_cookie(
            self._name,
            self._signer.sign(session_id).decode("utf-8"),
            max_age=self._max_age,
            httponly=True,
            secure=self._secure,
            samesite=self._samesite,
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(
            self._name, httponly=True, secure=self._secure, samesite=self._samesite
        )


def current_session_id() -> str | None:
    return getattr(g, "session_id", None)


def current_user() -> SessionData | None:
    return getattr(g, "current_user", None)


def configure_session_loading(app: Flask, cookie: SessionCookie, store: SessionStore) -> None:
    @app.before_request
    def _load_session() -> None:
        g.session_id = None
        g.current_user = None
        g.user_id = None
        session_id = cookie.read(request)
        if not session_id:
            return
        data = store.get(session_id)
        if data is None:
            logger.debug("session: unknown or expired session id")
            return
        g.session_id = session_id
        g.current_user = data
        g.user_id = data.user_id

    @app.context_processor
    def _inject_user() -> dict[str, object]:
        data = current_user()
        user = None
        if data is not None:
            user = {"id": data.user_id, "username": data.username, "role": data.role}
        return {"current_user": user, "current_path": request.path}


__all__ = [
    "SessionCookie",
    "configure_session_loading",
    "current_session_id",
    "current_user",
]
