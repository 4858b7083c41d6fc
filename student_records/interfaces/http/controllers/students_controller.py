# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from time import perf_counter
from typing import Any

from flask import Blueprint, redirect, render_template, request, url_for
from werkzeug.wrappers import Response

from student_records.application.use_cases.students import (
    CreateStudentUseCase,
    DeleteStudentUseCase,
    GetStudentUseCase,
    ListStudentsUseCase,
    UpdateStudentUseCase,
    build_student_query,
)
from student_records.interfaces.http.dto.students import StudentForm, parse_student_id
from student_records.interfaces.http.flash import flash_message
from student_records.shared.errors import UniqueConstraintViolation, validate_input
from student_records.shared.logging import logger

ADD_TEMPLATE = "students/new.html"
EDIT_TEMPLATE = "students/edit.html"


def _submitted() -> dict[str, Any]:
    values = request.form.to_dict()
    values.pop("_method", None)
    return values


class StudentsController:
    def __init__(
        self,
        *,
        list_students: ListStudentsUseCase,
        get_student: GetStudentUseCase,
        create_student: CreateStudentUseCase,
        update_student: UpdateStudentUseCase,
        delete_student: DeleteStudentUseCase,
    ) -> None:
        self._list_students = list_students
        self._get_student = get_student
        self._create_student = create_student
        self._update_student = update_student
        self._delete_student = delete_student

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("students", __name__, url_prefix="/students")
        bp.add_url_rule("", view_func=self.index, methods=["GET"])
        bp.add_url_rule("", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/new", view_func=self.new, methods=["GET"])
        bp.add_url_rule("/<student_id>", view_func=self.show, methods=["GET"])
        bp.add_url_rule("/<student_id>/edit", view_func=self.edit, methods=["GET"])
        bp.add_url_rule("/<student_id>", view_func=self.update, methods=["PUT", "PATCH"])
        bp.add_url_rule("/<student_id>", view_func=self.delete, methods=["DELETE"])
        return bp

    def index(self) -> str:
        t0 = perf_counter()
        query = build_student_query(request.args)
        page = self._list_students.execute(query)
        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"students.list: ok (page={page.pagination.page}, n={len(page.students)}, "
            f"total={page.pagination.total}, dt_ms={dt:.0f})"
        )
        return render_template(
            "students/list.html",
            title="Students",
            students=[student.to_dict() for student in page.students],
            pagination=page.pagination,
            filters=query.echo,
            flash_msg=flash_message(request.args.get("msg")),
        )

    def new(self) -> str:
        return render_template(ADD_TEMPLATE, title="Add Student", errors=[], values={})

    def create(self) -> Response | tuple[str, int]:
        values = _submitted()
        form, errors = validate_input(StudentForm, values)
        if form is None:
            logger.info(f"students.create: invalid (n_errors={len(errors)})")
            return self._render_form(ADD_TEMPLATE, "Add Student", errors, values, HTTPStatus.UNPROCESSABLE_ENTITY)
        try:
            student = self._create_student.execute(form.to_student_data())
        except UniqueConstraintViolation as exc:
            logger.info(f"students.create: duplicate (field={exc.field})")
            return self._render_form(
                ADD_TEMPLATE, "Add Student", [{"msg": exc.message}], values, HTTPStatus.CONFLICT
            )
        logger.info(f"students.create: ok (id={student.id})")
        return redirect(url_for("students.show", student_id=student.id, msg="created"))

    def show(self, student_id: str) -> str:
        student = self._get_student.execute(parse_student_id(student_id))
        return render_template(
            "students/detail.html",
            title="Student Details",
            student=student.to_dict(),
            flash_msg=flash_message(request.args.get("msg")),
        )

    def edit(self, student_id: str) -> str:
        student = self._get_student.execute(parse_student_id(student_id))
        return render_template(
            EDIT_TEMPLATE, title="Edit Student", errors=[], values=student.to_dict()
        )

    def update(self, student_id: str) -> Response | tuple[str, int]:
        student_id = parse_student_id(student_id)
        values = {**_submitted(), "id": student_id}
        form, errors = validate_input(StudentForm, values)
        if form is None:
            logger.info(f"students.update: invalid (id={student_id}, n_errors={len(errors)})")
            return self._render_form(EDIT_TEMPLATE, "Edit Student", errors, values, HTTPStatus.UNPROCESSABLE_ENTITY)
        try:
            student = self._update_student.execute(student_id, form.to_student_data())
        except UniqueConstraintViolation as exc:
            logger.info(f"students.update: duplicate (id={student_id}, field={exc.field})")
            return self._render_form(
                EDIT_TEMPLATE, "Edit Student", [{"msg": exc.message}], values, HTTPStatus.CONFLICT
            )
        logger.info(f"students.update: ok (id={student.id})")
        return redirect(url_for("students.show", student_id=student.id, msg="updated"))

    def delete(self, student_id: str) -> Response:
        self._delete_student.execute(student_id)
        logger.info(f"students.delete: ok (id={student_id})")
        return redirect(url_for("students.index", msg="deleted"))

    @staticmethod
    def _render_form(
        template: str,
        title: str,
        errors: list[dict[str, str]],
        values: dict[str, Any],
        status: HTTPStatus,
    ) -> tuple[str, int]:
        return (
            render_template(template, title=title, errors=errors, values=values),
            int(status),
        )
