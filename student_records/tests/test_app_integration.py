from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import pytest
from flask import Flask
from flask.testing import FlaskClient

from student_records.app import create_app
from student_records.infrastructure.db import SessionLocal
from student_records.infrastructure.db.models import Student, UserSession

pytestmark = pytest.mark.usefixtures("reset_database")


@pytest.fixture()
def app() -> Flask:
    return create_app()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


def _student_form(**overrides: str) -> dict[str, str]:
    values = {
        "name": "Ada Lovelace",
        "rollNumber": "CS-101",
        "email": "ada@example.com",
        "department": "Mathematics",
        "customDepartment": "",
        "gpa": "3.9",
    }
    values.update(overrides)
    return values


def _location(response) -> tuple[str, dict[str, list[str]]]:
    parsed = urlparse(response.headers["Location"])
    return parsed.path, parse_qs(parsed.query)


def _create(client: FlaskClient, **overrides: str) -> str:
    response = client.post("/students", data=_student_form(**overrides))
    assert response.status_code == 302
    path, query = _location(response)
    assert query == {"msg": ["created"]}
    return path.rsplit("/", 1)[-1]


def test_dashboard_empty(client: FlaskClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Total students" in body
    assert "N/A" in body


def test_dashboard_stats_and_flash(client: FlaskClient) -> None:
    _create(client, gpa="3.0")
    _create(client, rollNumber="CS-102", email="b@example.com", gpa="2.0")

    body = client.get("/?msg=logout_success").get_data(as_text=True)

    assert 'id="total">2<' in body
    assert "2.50" in body
    assert "Mathematics: 2" in body
    assert "You have been successfully logged out." in body


def test_create_show_update_delete(client: FlaskClient) -> None:
    student_id = _create(client)

    detail = client.get(f"/students/{student_id}?msg=created")
    assert detail.status_code == 200
    detail_body = detail.get_data(as_text=True)
    assert "Ada Lovelace" in detail_body
    assert "cs-101" in detail_body
    assert "Student created successfully." in detail_body

    edit = client.get(f"/students/{student_id}/edit")
    assert edit.status_code == 200
    assert 'value="Ada Lovelace"' in edit.get_data(as_text=True)

    update = client.post(
        f"/students/{student_id}",
        data={**_student_form(name="Ada King", gpa="4.0"), "_method": "PUT"},
    )
    assert update.status_code == 302
    assert _location(update) == (f"/students/{student_id}", {"msg": ["updated"]})
    assert "Ada King" in client.get(f"/students/{student_id}").get_data(as_text=True)

    delete = client.post(f"/students/{student_id}", data={"_method": "DELETE"})
    assert delete.status_code == 302
    assert _location(delete) == ("/students", {"msg": ["deleted"]})
    assert client.get(f"/students/{student_id}").status_code == 404


def test_delete_unknown_id_redirects_the_same(client: FlaskClient) -> None:
    response = client.delete("/students/" + "0" * 32)

    assert response.status_code == 302
    assert _location(response) == ("/students", {"msg": ["deleted"]})


def test_custom_department_is_persisted(client: FlaskClient) -> None:
    student_id = _create(client, department="custom", customDepartment="Physics")

    session = SessionLocal()
    try:
        assert session.get(Student, student_id).department == "Physics"
    finally:
        session.close()


def test_create_validation_failure_rerenders_form(client: FlaskClient) -> None:
    response = client.post("/students", data=_student_form(name="", gpa="7"))

    assert response.status_code == 422
    body = response.get_data(as_text=True)
    assert "Name is required" in body
    assert "GPA must be between 0.0 and 4.0" in body
    assert 'value="CS-101"' in body


def test_duplicate_roll_number_conflict(client: FlaskClient) -> None:
    _create(client)

    response = client.post(
        "/students", data=_student_form(rollNumber="cs-101", email="other@example.com")
    )

    assert response.status_code == 409
    assert "rollNumber must be unique" in response.get_data(as_text=True)


def test_update_validation_and_missing(client: FlaskClient) -> None:
    student_id = _create(client)

    invalid = client.put(f"/students/{student_id}", data=_student_form(email="bad"))
    missing = client.put("/students/" + "f" * 32, data=_student_form())

    assert invalid.status_code == 422
    assert "Valid email is required" in invalid.get_data(as_text=True)
    assert missing.status_code == 404
    assert "Student not found" in missing.get_data(as_text=True)


def test_show_missing_and_invalid_ids(client: FlaskClient) -> None:
    missing = client.get("/students/" + "a" * 32)
    invalid = client.get("/students/not-an-id")

    assert missing.status_code == 404
    assert "Student not found" in missing.get_data(as_text=True)
    assert invalid.status_code == 422


def test_list_pagination_search_and_echo(client: FlaskClient) -> None:
    for n in range(12):
        _create(client, rollNumber=f"R-{n}", email=f"s{n}@example.com", name=f"Student {n}")

    first = client.get("/students?limit=5")
    third = client.get("/students?limit=5&page=3")
    beyond = client.get("/students?limit=5&page=9")
    search = client.get("/students?q=Student+11&minGpa=abc")

    assert first.get_data(as_text=True).count('class="student-row"') == 5
    assert "Page 1 of 3 (12 total)" in first.get_data(as_text=True)
    assert third.get_data(as_text=True).count('class="student-row"') == 2
    assert beyond.status_code == 200
    assert "No students found." in beyond.get_data(as_text=True)
    search_body = search.get_data(as_text=True)
    assert 'value="Student 11"' in search_body
    assert 'name="minGpa" type="number" step="0.01" placeholder="Min GPA" value=""' in search_body


def test_huge_page_number_renders_empty_page(client: FlaskClient) -> None:
    _create(client)

    response = client.get("/students?page=99999999999999999999")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "No students found." in body
    assert body.count('class="student-row"') == 0


def test_unknown_route_renders_not_found(client: FlaskClient) -> None:
    html = client.get("/nope")
    as_json = client.get("/nope", headers={"Accept": "application/json"})

    assert html.status_code == 404
    assert "The page you requested was not found." in html.get_data(as_text=True)
    assert as_json.status_code == 404
    assert as_json.get_json() == {"error": "The page you requested was not found."}


def test_security_headers(client: FlaskClient) -> None:
    response = client.get("/")

    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in response.headers


def test_signup_login_logout_flow(client: FlaskClient) -> None:
    signup = client.post(
        "/signup",
        data={
            "username": "alice",
            "email": "alice@example.com",
            "password": "secret1",
            "confirmPassword": "secret1",
        },
    )
    assert signup.status_code == 302
    assert _location(signup) == ("/login", {"msg": ["signup_success"]})

    duplicate = client.post(
        "/signup",
        data={
            "username": "alice2",
            "email": "alice@example.com",
            "password": "secret1",
            "confirmPassword": "secret1",
        },
    )
    assert duplicate.status_code == 409
    assert "Email already registered" in duplicate.get_data(as_text=True)

    wrong = client.post("/login", data={"email": "alice@example.com", "password": "nope-nope"})
    unknown = client.post("/login", data={"email": "bob@example.com", "password": "secret1"})
    assert wrong.status_code == unknown.status_code == 401
    assert "Invalid email or password" in wrong.get_data(as_text=True)
    assert "Invalid email or password" in unknown.get_data(as_text=True)

    login = client.post("/login", data={"email": "Alice@Example.com", "password": "secret1"})
    assert login.status_code == 302
    assert _location(login) == ("/", {"msg": ["login_success"]})
    assert client.get_cookie("sid") is not None

    home = client.get("/?msg=login_success").get_data(as_text=True)
    assert "Welcome back! You have successfully logged in." in home
    assert "alice (user)" in home

    logout = client.get("/logout")
    assert logout.status_code == 302
    assert _location(logout) == ("/", {"msg": ["logout_success"]})
    assert client.get_cookie("sid") is None
    assert "alice (user)" not in client.get("/").get_data(as_text=True)

    session = SessionLocal()
    try:
        assert session.query(UserSession).count() == 0
    finally:
        session.close()


def test_tampered_session_cookie_is_ignored(client: FlaskClient) -> None:
    client.set_cookie("sid", "forged.value.signature")

    response = client.get("/")

    assert response.status_code == 200
    assert "Logout" not in response.get_data(as_text=True)


def test_signup_validation_failure(client: FlaskClient) -> None:
    response = client.post(
        "/signup",
        data={"username": "a", "email": "x", "password": "1", "confirmPassword": "2"},
    )

    assert response.status_code == 422
    body = response.get_data(as_text=True)
    assert "Username must be between 3 and 30 characters" in body
    assert "Password must be at least 6 characters long" in body
