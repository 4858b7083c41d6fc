# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from student_records.shared.logging import logger

from .base import AppError

GENERIC_ERROR_MESSAGE = "An unexpected error occurred."
NOT_FOUND_MESSAGE = "The page you requested was not found."


def wants_html() -> bool:
    accept = request.accept_mimetypes
    return not accept or accept.accept_html


def render_error(status: int, message: str, title: str = "Error") -> tuple[Response | str, int]:
    if wants_html():
        return render_template("error.html", title=title, message=message, status=status), status
    return jsonify({"error": message}), status


def handle_app_error(error: AppError) -> tuple[Response | str, int]:
    status = int(error.status)
    if status >= 500:
        return render_error(status, GENERIC_ERROR_MESSAGE)
    title = "Not Found" if status == HTTPStatus.NOT_FOUND else "Error"
    if not wants_html():
        return jsonify(error.to_dict()), status
    return render_error(status, error.message or error.code, title=title)


def register_error_handler(
    app: Flask, *, default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.warning(
            f"Handled application error {exc.code} ({int(exc.status)}) "
            f"on {request.method} {request.path}"
        )
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        status = exc.code or int(default_status)
        if status == HTTPStatus.NOT_FOUND:
            return render_error(status, NOT_FOUND_MESSAGE, title="Not Found")
        if status >= 500:
            return render_error(status, GENERIC_ERROR_MESSAGE)
        return render_error(status, exc.description or exc.name)

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        ip_address = (
            request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
            or request.remote_addr
            or "unknown"
        )
        logger.exception(
            f"Unhandled exception {type(exc).__name__}: {request.method} {request.path} "
            f"from {ip_address}, query={dict(request.args)}"
        )
        return render_error(int(default_status), GENERIC_ERROR_MESSAGE)
