from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..container import Container
from ..web.auth import make_guards


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_guards(container)

    @app.route("/api/stats", methods=["GET"], endpoint="stats_dashboard")
    @login_required
    def stats_dashboard(member):
        return jsonify(container.stats_service.dashboard_stats().to_dict())

    @app.route("/api/reports/stats", methods=["GET"], endpoint="stats_report")
    @admin_required
    def stats_report(member):
        return jsonify(container.stats_service.report_stats().to_dict())

    @app.route("/api/reports/export", methods=["POST"], endpoint="reports_export")
    @admin_required
    def reports_export(member):
        body = request.get_json(silent=True) or {}
        export = container.export_service.export_attendance(body.get("format"), body.get("filters"))
        return send_file(
            io.BytesIO(export.content),
            mimetype=export.mimetype,
            as_attachment=True,
            download_name=export.filename,
        )
