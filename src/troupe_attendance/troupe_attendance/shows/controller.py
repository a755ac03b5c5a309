from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..web.auth import make_guards


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_guards(container)
    shows = container.show_service

    @app.route("/api/shows", methods=["GET"], endpoint="shows_list")
    @login_required
    def shows_list(member):
        return jsonify([s.to_dict() for s in shows.list_with_details()])

    @app.route("/api/shows/recent", methods=["GET"], endpoint="shows_recent")
    @login_required
    def shows_recent(member):
        return jsonify([s.to_dict() for s in shows.recent()])

    @app.route("/api/shows", methods=["POST"], endpoint="shows_create")
    @admin_required
    def shows_create(member):
        show = shows.create_show(request.get_json(silent=True) or {}, created_by_id=member.member_id)
        return jsonify(show.to_dict()), 201

    @app.route("/api/shows/<show_id>", methods=["PATCH"], endpoint="shows_update")
    @admin_required
    def shows_update(member, show_id: str):
        show = shows.update_show(show_id, request.get_json(silent=True) or {})
        return jsonify(show.to_dict())

    @app.route("/api/shows/<show_id>", methods=["DELETE"], endpoint="shows_delete")
    @admin_required
    def shows_delete(member, show_id: str):
        shows.delete_show(show_id)
        return "", 204
