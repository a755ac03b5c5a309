from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file, session

from ..container import Container
from ..web.auth import SESSION_MEMBER_KEY, json_error, make_guards


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_guards(container)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        body = request.get_json(silent=True) or {}
        s_member = container.auth_service.login(body.get("emailOrMobile") or "", body.get("mhtId") or "")

        session.clear()
        session.permanent = True
        session[SESSION_MEMBER_KEY] = s_member.member_id
        session["name"] = s_member.name
        session["is_admin"] = s_member.is_admin

        member = container.member_service.get_member(s_member.member_id)
        app.logger.info("member %s logged in", member.mht_id)
        return jsonify({"message": "Logged in successfully", "member": member.to_dict()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out successfully"})

    @app.route("/api/auth/user", methods=["GET"], endpoint="auth_user")
    @login_required
    def auth_user(member):
        return jsonify(member.to_dict())

    @app.route("/api/members/me", methods=["GET"], endpoint="member_me")
    @login_required
    def member_me(member):
        return jsonify(member.to_dict())

    @app.route("/api/members/me", methods=["PATCH"], endpoint="member_me_update")
    @login_required
    def member_me_update(member):
        updated = container.member_service.update_profile(member.member_id, request.get_json(silent=True) or {})
        return jsonify(updated.to_dict())

    @app.route("/api/members", methods=["GET"], endpoint="members_list")
    @admin_required
    def members_list(member):
        return jsonify([m.to_dict() for m in container.member_service.list_members()])

    @app.route("/api/members", methods=["POST"], endpoint="members_create")
    @admin_required
    def members_create(member):
        body = request.get_json(silent=True) or {}
        created = container.member_service.create_member(
            mht_id=body.get("mhtId"),
            name=body.get("name"),
            email=body.get("email"),
            mobile=body.get("mobile"),
            birthday=body.get("birthday"),
            g_day=body.get("gDay"),
            is_admin=body.get("isAdmin", False),
        )
        return jsonify(created.to_dict()), 201

    @app.route("/api/members/<member_id>", methods=["PATCH"], endpoint="members_update")
    @admin_required
    def members_update(member, member_id: str):
        updated = container.member_service.update_member(member_id, request.get_json(silent=True) or {})
        return jsonify(updated.to_dict())

    @app.route("/api/members/<member_id>", methods=["DELETE"], endpoint="members_delete")
    @admin_required
    def members_delete(member, member_id: str):
        container.member_service.delete_member(member_id)
        return "", 204

    @app.route("/api/members/export", methods=["GET"], endpoint="members_export")
    @admin_required
    def members_export(member):
        export = container.export_service.export_members()
        return send_file(
            io.BytesIO(export.content),
            mimetype=export.mimetype,
            as_attachment=True,
            download_name=export.filename,
        )

    @app.route("/api/members/import", methods=["POST"], endpoint="members_import")
    @admin_required
    def members_import(member):
        file = request.files.get("file")
        if not file:
            return json_error("No file provided", 400)
        result = container.member_service.import_members_from_excel(file.stream)
        return jsonify(result.to_dict())
