# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from student_records.shared.errors.base import ValidationError


class InvariantViolationError(ValidationError):
    """Raised by the storage layer when a record breaks a schema rule."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(
            code="invariant_violation",
            context={"errors": [{"field": field or "unknown", "msg": message}]},
            message=message,
        )
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return str(self.message)


StoreValidationError = InvariantViolationError
