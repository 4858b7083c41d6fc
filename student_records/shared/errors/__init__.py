from .base import (
    AppError,
    DomainError,
    InvalidIdentifierError,
    RateLimitedError,
    UniqueConstraintViolation,
    ValidationError,
)
from .http import handle_app_error, register_error_handler
from .validation import format_pydantic_errors, validate_input

__all__ = [
    "AppError",
    "DomainError",
    "InvalidIdentifierError",
    "RateLimitedError",
    "UniqueConstraintViolation",
    "ValidationError",
    "format_pydantic_errors",
    "handle_app_error",
    "register_error_handler",
    "validate_input",
]
