from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest

from ..auth.request_context import require_acting_user
from ..container import Container
from ..core.constants import DEFAULT_REPORT_DAYS, MAX_REPORT_DAYS


def register(app: Flask, container: Container) -> None:
    @app.route("/reports", methods=["GET"], endpoint="reports")
    def reports():
        user = require_acting_user(container)

        raw = request.args.get("days", str(DEFAULT_REPORT_DAYS))
        try:
            days = int(raw)
        except ValueError:
            raise BadRequest("'days' must be an integer")
        if days <= 0:
            raise BadRequest("'days' must be positive")
        if days > MAX_REPORT_DAYS:
            raise BadRequest(f"'days' must be at most {MAX_REPORT_DAYS}")

        report = container.reporting_service.build_hours_report(user, window_days=days)
        return jsonify(report.to_dict())
