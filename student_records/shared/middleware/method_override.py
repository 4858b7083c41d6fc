# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Let HTML forms reach PUT/PATCH/DELETE routes.

Browsers only submit GET and POST, so a POST carrying ``_method=DELETE`` in
its query string or urlencoded body (or an ``X-HTTP-Method-Override`` header)
is rewritten before Flask routes it.
"""

from __future__ import annotations

from io import BytesIO
from typing import Any
from urllib.parse import parse_qs

from werkzeug.wrappers import Request

OVERRIDABLE_METHODS = frozenset({"PUT", "PATCH", "DELETE"})
FORM_FIELD = "_method"
HEADER = "HTTP_X_HTTP_METHOD_OVERRIDE"


class MethodOverrideMiddleware:
    def __init__(self, app: Any) -> None:
        self.app = app

    def __call__(self, environ: dict[str, Any], start_response: Any):
        if environ.get("REQUEST_METHOD", "").upper() == "POST":
            method = self._requested_method(environ)
            if method in OVERRIDABLE_METHODS:
                environ["REQUEST_METHOD"] = method
        return self.app(environ, start_response)

    def _requested_method(self, environ: dict[str, Any]) -> str:
        header = environ.get(HEADER, "")
        if header:
            return header.upper()

        query = parse_qs(environ.get("QUERY_STRING", ""))
        if FORM_FIELD in query:
            return query[FORM_FIELD][0].upper()

        content_type = environ.get("CONTENT_TYPE", "")
        if not content_type.startswith("application/x-www-form-urlencoded"):
            return ""

        # Read the body once and put it back so the view still sees the form.
        body = Request(environ, populate_request=False).get_data(cache=False)
        environ["wsgi.input"] = BytesIO(body)
        environ["CONTENT_LENGTH"] = str(len(body))
        values = parse_qs(body.decode("latin-1"))
        if FORM_FIELD in values:
            return values[FORM_FIELD][0].upper()
        return ""


__all__ = ["MethodOverrideMiddleware"]
