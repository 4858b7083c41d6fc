# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_pydantic_errors(exc: PydanticValidationError) -> list[dict[str, str]]:
    errors_list = []

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)
        errors_list.append(
            {
                "field": field_path or "unknown",
                "type": error.get("type", "value_error"),
                "msg": error.get("msg", "Invalid value"),
            }
        )

    return errors_list


def validate_input(
    model: type[ModelT], raw: Mapping[str, Any]
) -> tuple[ModelT | None, list[dict[str, str]]]:
    """Parse raw form data into ``model``.

    Returns the parsed model and an empty list, or ``None`` and the field
    errors in declaration order.
    """
    try:
        return model.model_validate(dict(raw)), []
    except PydanticValidationError as exc:
        return None, format_pydantic_errors(exc)


__all__ = [
    "format_pydantic_errors",
    "validate_input",
]
