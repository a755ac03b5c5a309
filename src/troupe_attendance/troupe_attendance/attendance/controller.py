from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..web.auth import make_guards


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_guards(container)
    attendance = container.attendance_service

    @app.route("/api/attendance/my", methods=["GET"], endpoint="attendance_my")
    @login_required
    def attendance_my(member):
        return jsonify([r.to_dict() for r in attendance.history_for_member(member.member_id)])

    @app.route("/api/attendance/all", methods=["GET"], endpoint="attendance_all")
    @admin_required
    def attendance_all(member):
        return jsonify([r.to_dict() for r in attendance.list_with_details()])

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_create")
    @login_required
    def attendance_create(member):
        record = attendance.record_for_member(member.member_id, request.get_json(silent=True) or {})
        return jsonify(record.to_dict()), 201

    @app.route("/api/attendance/admin", methods=["POST"], endpoint="attendance_admin_create")
    @admin_required
    def attendance_admin_create(member):
        record = attendance.record_as_admin(request.get_json(silent=True) or {})
        return jsonify(record.to_dict()), 201
