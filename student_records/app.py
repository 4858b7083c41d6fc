# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask

from student_records.infrastructure.auth.session_cookie import configure_session_loading
from student_records.infrastructure.container import Container, container
from student_records.infrastructure.db import init_db
from student_records.shared.config import load_config
from student_records.shared.logging import logger, setup_logging
from student_records.shared.middleware.error_handler import configure_error_handling
from student_records.shared.middleware.method_override import MethodOverrideMiddleware
from student_records.shared.middleware.request_logger import configure_request_logging

_config = load_config()


def create_app(app_container: Container | None = None) -> Flask:
    deps = app_container or container
    init_db()
    setup_logging(debug_mode=_config.debug_logging)

    purged = deps.session_store.purge_expired()
    if purged:
        logger.info(f"sessions: purged {purged} expired")

    app = Flask(__name__)
    app.wsgi_app = MethodOverrideMiddleware(app.wsgi_app)
    app.config.update(SECRET_KEY=_config.secret_key)

    configure_error_handling(app)
    configure_request_logging(app)
    configure_session_loading(app, deps.session_cookie, deps.session_store)

    app.register_blueprint(deps.dashboard_controller.as_blueprint())
    app.register_blueprint(deps.auth_controller.as_blueprint())
    app.register_blueprint(deps.students_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")

        resp.headers.setdefault("Referrer-Policy", "same-origin")

        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        resp.headers.setdefault(
            "Permissions-Policy",
            "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
        )

        if _config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=_config.port, debug=not _config.is_production())
