"""Use-case for ending an authenticated session."""

from __future__ import annotations

from student_records.domain.users.repositories import SessionStore
from student_records.shared.logging import logger


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def execute(self, session_id: str | None) -> None:
        if not session_id:
            return
        try:
            self._sessions.destroy(session_id)
        except Exception:
            # The client is logged out either way; the stale row expires on its own.
            logger.exception("auth.logout: failed to destroy session")
