# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message or self.code, "code": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        resolved_message = message or cast(str | None, getattr(self, "message", None))
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            context=context,
            message=resolved_message,
        )


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
            message=message or "Submitted data is invalid",
        )


class InvalidIdentifierError(ValidationError):
    def __init__(self, value: str) -> None:
        super().__init__(
            code="invalid_id",
            context={"errors": [{"field": "id", "msg": "Invalid identifier"}], "id": value},
            message="Invalid identifier",
        )


class UniqueConstraintViolation(AppError):
    def __init__(self, field: str) -> None:
        super().__init__(
            code="duplicate_value",
            status=HTTPStatus.CONFLICT,
            context={"field": field},
            message=f"{field} must be unique",
        )

    @property
    def field(self) -> str:
        return str((self.context or {}).get("field", ""))


class RateLimitedError(AppError):
    def __init__(self, retry_after: float) -> None:
        super().__init__(
            code="rate_limited",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            context={"retry_after_seconds": round(retry_after, 1)},
            message="Too many attempts. Please wait and try again.",
        )
