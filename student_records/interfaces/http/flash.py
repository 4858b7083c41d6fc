# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

FLASH_MESSAGES: dict[str, str] = {
    "created": "Student created successfully.",
    "updated": "Student updated successfully.",
    "deleted": "Student deleted successfully.",
    "login_success": "Welcome back! You have successfully logged in.",
    "logout_success": "You have been successfully logged out.",
    "signup_success": "Account created successfully! Please log in.",
}


def flash_message(code: str | None) -> str:
    """Human text for a ``?msg=`` indicator; unknown codes render nothing."""
    return FLASH_MESSAGES.get((code or "").strip(), "")
