"""Password hashing strategies."""

from __future__ import annotations

import bcrypt

from student_records.domain.users.repositories import PasswordHasher

DEFAULT_ROUNDS = 12
# bcrypt only consumes the first 72 bytes of a secret; newer releases raise
# instead of truncating.
_BCRYPT_MAX_BYTES = 72


def _truncate(password: str) -> bytes:
    return (password or "").encode("utf-8")[:_BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_truncate(password), salt).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bool(bcrypt.checkpw(_truncate(password), hashed.encode("ascii")))
        except ValueError:
            # Not a bcrypt hash.
            return False
