# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
import time
from typing import Any

from flask import Flask, g, request

from student_records.shared.config import load_config
from student_records.shared.logging import clear_correlation_id, logger, set_correlation_id


def _get_client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    return request.remote_addr or "unknown"


def _get_user_id() -> str | None:
    return getattr(g, "user_id", None)


def _sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    sensitive_params = {"password", "token", "secret", "sid"}

    sanitized = {}
    for key, value in params.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in sensitive_params):
            sanitized[key] = "<redacted>"
        else:
            sanitized[key] = value

    return sanitized


def _log_request_end(debug_mode: bool, status_code: int, start_time: float) -> None:
    duration_ms = (time.perf_counter() - start_time) * 1000.0
    ip_address = _get_client_ip()

    if debug_mode:
        query_params = _sanitize_query_params(dict(request.args))
        logger.info(
            f"Request completed: {request.method} {request.full_path.rstrip('?')} "
            f"status={status_code}, duration_ms={duration_ms:.2f}, "
            f"from {ip_address}, user={_get_user_id()}, query={query_params}"
        )
    else:
        logger.info(
            f"{request.method} {request.full_path.rstrip('?')} -> {status_code} "
            f"in {duration_ms:.2f} ms from {ip_address}"
        )


def configure_request_logging(app: Flask) -> None:
    debug_mode = load_config().debug_logging

    @app.before_request
    def _before_request() -> None:
        correlation_id = request.headers.get("X-Request-ID") or secrets.token_urlsafe(8)
        set_correlation_id(correlation_id)
        g.correlation_id = correlation_id
        g.request_start_time = time.perf_counter()

    @app.after_request
    def _after_request(response):
        start_time = getattr(g, "request_start_time", time.perf_counter())
        _log_request_end(debug_mode, response.status_code, start_time)
        response.headers.setdefault("X-Request-ID", getattr(g, "correlation_id", "-"))
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"Request error: {type(exc).__name__} on {request.method} {request.path} "
                f"from {_get_client_ip()}"
            )
        clear_correlation_id()


__all__ = ["configure_request_logging"]
