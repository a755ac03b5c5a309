from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..web.auth import make_guards


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_guards(container)
    submissions = container.submission_service

    @app.route("/api/reports", methods=["GET"], endpoint="submissions_list")
    @login_required
    def submissions_list(member):
        return jsonify([s.to_dict() for s in submissions.list_for(member)])

    @app.route("/api/reports", methods=["POST"], endpoint="submissions_create")
    @login_required
    def submissions_create(member):
        body = request.get_json(silent=True) or {}
        submission = submissions.submit(
            member.member_id,
            content=body.get("content"),
            event_type=body.get("eventType"),
            event_custom=body.get("eventCustom"),
        )
        return jsonify(submission.to_dict()), 201

    @app.route("/api/reports/<submission_id>/read", methods=["PATCH"], endpoint="submissions_mark_read")
    @admin_required
    def submissions_mark_read(member, submission_id: str):
        submissions.mark_read(submission_id)
        return "", 204
