from __future__ import annotations

import pytest
from flask import Flask, request

from student_records.shared.errors import RateLimitedError, UniqueConstraintViolation
from student_records.shared.middleware.error_handler import configure_error_handling
from student_records.shared.middleware.method_override import MethodOverrideMiddleware
from student_records.shared.middleware.rate_limit import InMemoryRateLimiter, rate_limit


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    app.wsgi_app = MethodOverrideMiddleware(app.wsgi_app)
    configure_error_handling(app)

    @app.route("/echo", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    def echo():
        return {"method": request.method, "form": request.form.to_dict()}

    @app.route("/conflict")
    def conflict():
        raise UniqueConstraintViolation("email")

    @app.route("/limited")
    def limited():
        raise RateLimitedError(12.0)

    @app.route("/boom")
    def boom():
        raise RuntimeError("database password leaked in message")

    return app


@pytest.mark.parametrize("method", ["PUT", "PATCH", "DELETE"])
def test_form_field_overrides_post(flask_app: Flask, method: str) -> None:
    with flask_app.test_client() as client:
        response = client.post("/echo", data={"_method": method.lower(), "name": "Ada"})

    assert response.get_json() == {"method": method, "form": {"_method": method.lower(), "name": "Ada"}}


def test_query_string_and_header_override(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        by_query = client.post("/echo?_method=DELETE")
        by_header = client.post("/echo", headers={"X-HTTP-Method-Override": "PATCH"})

    assert by_query.get_json()["method"] == "DELETE"
    assert by_header.get_json()["method"] == "PATCH"


def test_override_ignores_get_and_unknown_methods(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        on_get = client.get("/echo?_method=DELETE")
        unknown = client.post("/echo", data={"_method": "TRACE"})

    assert on_get.get_json()["method"] == "GET"
    assert unknown.get_json()["method"] == "POST"


def test_app_errors_render_json_when_html_not_accepted(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.get("/conflict", headers={"Accept": "application/json"})

    assert response.status_code == 409
    payload = response.get_json()
    assert payload["error"] == "email must be unique"
    assert payload["code"] == "duplicate_value"


def test_rate_limited_error_renders_429(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.get("/limited", headers={"Accept": "application/json"})

    assert response.status_code == 429
    payload = response.get_json()
    assert payload["error"] == "Too many attempts. Please wait and try again."
    assert payload["context"] == {"retry_after_seconds": 12.0}


def test_unexpected_errors_hide_details(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        as_json = client.get("/boom", headers={"Accept": "application/json"})

    assert as_json.status_code == 500
    assert as_json.get_json() == {"error": "An unexpected error occurred."}


def test_rate_limiter_sliding_window() -> None:
    now = [0.0]
    limiter = InMemoryRateLimiter(limit=2, window_seconds=10.0, clock=lambda: now[0])

    assert limiter.allow("ip")
    assert limiter.allow("ip")
    assert not limiter.allow("ip")
    assert limiter.allow("other-ip")
    assert limiter.retry_after("ip") == pytest.approx(10.0)

    now[0] = 10.5
    assert limiter.allow("ip")


def test_rate_limiter_forgets_idle_clients() -> None:
    now = [0.0]
    limiter = InMemoryRateLimiter(limit=5, window_seconds=10.0, clock=lambda: now[0])

    limiter.allow("10.0.0.1")
    limiter.allow("10.0.0.2")
    now[0] = 5.0
    limiter.allow("10.0.0.3")
    assert len(limiter) == 3

    now[0] = 20.0
    limiter.allow("10.0.0.4")

    assert len(limiter) == 1


def test_rate_limit_decorator_is_noop_when_disabled() -> None:
    def view() -> str:
        return "ok"

    assert rate_limit(limit=1)(view) is view
