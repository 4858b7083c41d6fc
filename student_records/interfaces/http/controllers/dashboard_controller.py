# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, render_template, request

from student_records.application.use_cases.students import GetDashboardStatsUseCase
from student_records.interfaces.http.flash import flash_message
from student_records.shared.logging import logger


class DashboardController:
    def __init__(self, *, get_dashboard_stats: GetDashboardStatsUseCase) -> None:
        self._get_dashboard_stats = get_dashboard_stats

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("dashboard", __name__)
        bp.add_url_rule("/", view_func=self.index, methods=["GET"])
        return bp

    def index(self) -> str:
        stats = self._get_dashboard_stats.execute()
        logger.debug(f"dashboard: total={stats.total} avg_gpa={stats.avg_gpa}")
        return render_template(
            "index.html",
            title="Home",
            total=stats.total,
            top_departments=stats.top_departments,
            avg_gpa=stats.avg_gpa,
            flash_msg=flash_message(request.args.get("msg")),
        )
