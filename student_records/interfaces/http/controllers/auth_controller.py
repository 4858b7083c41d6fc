# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, redirect, render_template, request, url_for
from werkzeug.wrappers import Response

from student_records.application.use_cases.users.login_user import LoginUserUseCase
from student_records.application.use_cases.users.logout_user import LogoutUserUseCase
from student_records.application.use_cases.users.register_user import RegisterUserUseCase
from student_records.domain.users.exceptions import (
    AccountDeactivatedError,
    InvalidCredentialsError,
    UserAlreadyExistsError,
)
from student_records.infrastructure.auth.session_cookie import SessionCookie, current_session_id
from student_records.interfaces.http.dto.auth import LoginForm, SignupForm
from student_records.interfaces.http.flash import flash_message
from student_records.shared.errors import validate_input
from student_records.shared.logging import logger
from student_records.shared.middleware.rate_limit import rate_limit

LOGIN_TEMPLATE = "auth/login.html"
SIGNUP_TEMPLATE = "auth/signup.html"
_SECRET_FIELDS = ("password", "confirmPassword")


def _submitted() -> dict[str, Any]:
    return request.form.to_dict()


def _echo(values: dict[str, Any]) -> dict[str, Any]:
    # Passwords are never sent back to the browser.
    return {key: value for key, value in values.items() if key not in _SECRET_FIELDS}


def _render(template: str, title: str, errors: list[dict[str, str]], values: dict[str, Any], status: int):
    return render_template(template, title=title, errors=errors, values=_echo(values)), status


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        session_cookie: SessionCookie,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._session_cookie = session_cookie

    def signup_form(self) -> str:
        return render_template(
            SIGNUP_TEMPLATE,
            title="Sign Up",
            errors=[],
            values={},
            flash_msg=flash_message(request.args.get("msg")),
        )

    @rate_limit()
    def signup(self) -> Response | tuple[str, int]:
        values = _submitted()
        form, errors = validate_input(SignupForm, values)
        if form is None:
            return _render(SIGNUP_TEMPLATE, "Sign Up", errors, values, HTTPStatus.UNPROCESSABLE_ENTITY)

        try:
            user = self._register_use_case.execute(form.username, form.email, form.password)
        except UserAlreadyExistsError as exc:
            logger.info(f"auth.register: taken (field={(exc.context or {}).get('field')})")
            return _render(SIGNUP_TEMPLATE, "Sign Up", [{"msg": exc.message}], values, HTTPStatus.CONFLICT)
        except Exception:
            logger.exception("auth.register: err")
            return _render(
                SIGNUP_TEMPLATE,
                "Sign Up",
                [{"msg": "An error occurred during signup. Please try again."}],
                values,
                HTTPStatus.INTERNAL_SERVER_ERROR,
            )

        logger.info(f"auth.register: ok user_id={user.id}")
        return redirect(url_for("auth.login_form", msg="signup_success"))

    def login_form(self) -> str:
        return render_template(
            LOGIN_TEMPLATE,
            title="Login",
            errors=[],
            values={},
            flash_msg=flash_message(request.args.get("msg")),
        )

    @rate_limit()
    def login(self) -> Response | tuple[str, int]:
        values = _submitted()
        form, errors = validate_input(LoginForm, values)
        if form is None:
            return _render(LOGIN_TEMPLATE, "Login", errors, values, HTTPStatus.UNPROCESSABLE_ENTITY)

        try:
            result = self._login_use_case.execute(
                form.email, form.password, previous_session_id=current_session_id()
            )
        except (InvalidCredentialsError, AccountDeactivatedError) as exc:
            logger.info(f"auth.login: rejected ({exc.code})")
            return _render(LOGIN_TEMPLATE, "Login", [{"msg": exc.message}], values, HTTPStatus.UNAUTHORIZED)
        except Exception:
            logger.exception("auth.login: err")
            return _render(
                LOGIN_TEMPLATE,
                "Login",
                [{"msg": "An error occurred during login. Please try again."}],
                values,
                HTTPStatus.INTERNAL_SERVER_ERROR,
            )

        response = redirect(url_for("dashboard.index", msg="login_success"))
        self._session_cookie.write(response, result.session_id)
        logger.info(f"auth.login: ok user_id={result.user.id}")
        return response

    def logout(self) -> Response:
        self._logout_use_case.execute(current_session_id())
        response = redirect(url_for("dashboard.index", msg="logout_success"))
        self._session_cookie.clear(response)
        logger.info("auth.logout: ok")
        return response

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/signup", view_func=self.signup_form, methods=["GET"])
        bp.add_url_rule("/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login_form, methods=["GET"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["GET"])
        return bp
