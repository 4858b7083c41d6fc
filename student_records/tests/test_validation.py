from __future__ import annotations

import pytest

from student_records.interfaces.http.dto.auth import LoginForm, SignupForm
from student_records.interfaces.http.dto.students import StudentForm, parse_student_id
from student_records.shared.errors import InvalidIdentifierError, validate_input


def _student(**overrides: str) -> dict[str, str]:
    values = {
        "name": "  Ada Lovelace ",
        "rollNumber": " CS-101 ",
        "email": " Ada@Example.com ",
        "department": "Mathematics",
        "customDepartment": "",
        "gpa": "3.9",
    }
    values.update(overrides)
    return values


def _messages(errors: list[dict[str, str]]) -> list[str]:
    return [error["msg"] for error in errors]


def test_student_form_normalizes_valid_input() -> None:
    form, errors = validate_input(StudentForm, _student())

    assert errors == []
    assert form is not None
    data = form.to_student_data()
    assert data.name == "Ada Lovelace"
    assert data.roll_number == "CS-101"
    assert data.email == "ada@example.com"
    assert data.department == "Mathematics"
    assert data.gpa == pytest.approx(3.9)


def test_student_form_reports_errors_in_field_order() -> None:
    form, errors = validate_input(
        StudentForm,
        {"name": "", "rollNumber": "bad roll!", "email": "nope", "department": "", "gpa": "abc"},
    )

    assert form is None
    assert [error["field"] for error in errors] == [
        "name",
        "rollNumber",
        "email",
        "department",
        "gpa",
    ]
    assert _messages(errors) == [
        "Name is required",
        "Roll number must be alphanumeric",
        "Valid email is required",
        "Department is required",
        "GPA must be between 0.0 and 4.0",
    ]


def test_student_form_missing_fields_are_reported() -> None:
    form, errors = validate_input(StudentForm, {})

    assert form is None
    assert "Roll number is required" in _messages(errors)
    assert "GPA must be between 0.0 and 4.0" in _messages(errors)


@pytest.mark.parametrize("domain", ["example.test", "printer.local", "box.localhost"])
def test_student_form_rejects_special_use_email_domains(domain: str) -> None:
    form, errors = validate_input(StudentForm, _student(email=f"ada@{domain}"))

    assert form is None
    assert _messages(errors) == ["Valid email is required"]


@pytest.mark.parametrize("gpa", ["0", "4", "4.0", "0.0", "2.5"])
def test_student_form_accepts_gpa_bounds(gpa: str) -> None:
    form, errors = validate_input(StudentForm, _student(gpa=gpa))

    assert errors == []
    assert form is not None


@pytest.mark.parametrize("gpa", ["-0.1", "4.01", "nan", "inf", ""])
def test_student_form_rejects_gpa_out_of_range(gpa: str) -> None:
    form, errors = validate_input(StudentForm, _student(gpa=gpa))

    assert form is None
    assert _messages(errors) == ["GPA must be between 0.0 and 4.0"]


def test_custom_department_becomes_effective_department() -> None:
    form, errors = validate_input(
        StudentForm, _student(department="custom", customDepartment="  Physics  ")
    )

    assert errors == []
    assert form is not None
    assert form.to_student_data().department == "Physics"


@pytest.mark.parametrize(
    ("custom", "message"),
    [
        ("", 'Custom department name is required when selecting "Custom Department"'),
        (" P ", "Custom department name must be at least 2 characters long"),
        ("x" * 101, "Custom department name must be at most 100 characters long"),
    ],
)
def test_custom_department_rules(custom: str, message: str) -> None:
    form, errors = validate_input(
        StudentForm, _student(department="custom", customDepartment=custom)
    )

    assert form is None
    assert errors[0]["field"] == "department"
    assert _messages(errors) == [message]


def test_signup_form_valid() -> None:
    form, errors = validate_input(
        SignupForm,
        {
            "username": " alice_01 ",
            "email": "Alice@Example.com",
            "password": "secret1",
            "confirmPassword": "secret1",
        },
    )

    assert errors == []
    assert form is not None
    assert form.username == "alice_01"
    assert form.email == "alice@example.com"


def test_signup_form_rules() -> None:
    form, errors = validate_input(
        SignupForm,
        {"username": "al", "email": "bad", "password": "12345", "confirmPassword": "12345"},
    )

    assert form is None
    assert _messages(errors) == [
        "Username must be between 3 and 30 characters",
        "Please enter a valid email address",
        "Password must be at least 6 characters long",
    ]


def test_signup_form_username_charset_and_confirmation() -> None:
    form, errors = validate_input(
        SignupForm,
        {
            "username": "alice-smith",
            "email": "alice@example.com",
            "password": "secret1",
            "confirmPassword": "secret2",
        },
    )

    assert form is None
    assert _messages(errors) == [
        "Username can only contain letters, numbers, and underscores",
        "Password confirmation does not match password",
    ]


def test_login_form_requires_password() -> None:
    form, errors = validate_input(LoginForm, {"email": "alice@example.com", "password": ""})

    assert form is None
    assert _messages(errors) == ["Password is required"]


def test_login_form_normalizes_email() -> None:
    form, errors = validate_input(LoginForm, {"email": " ALICE@example.com ", "password": "x"})

    assert errors == []
    assert form is not None
    assert form.email == "alice@example.com"


def test_parse_student_id() -> None:
    valid = "0123456789abcdef0123456789abcdef"

    assert parse_student_id(valid) == valid
    with pytest.raises(InvalidIdentifierError):
        parse_student_id("not-an-id")
