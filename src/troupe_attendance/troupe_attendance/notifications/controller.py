from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..container import Container
from ..web.auth import make_guards


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_guards(container)
    notifications = container.notification_service
    polls = container.poll_service

    @app.route("/api/notifications", methods=["GET"], endpoint="notifications_list")
    @login_required
    def notifications_list(member):
        return jsonify([n.to_dict() for n in notifications.list_all()])

    @app.route("/api/notifications/active", methods=["GET"], endpoint="notifications_active")
    @login_required
    def notifications_active(member):
        return jsonify([n.to_dict() for n in notifications.list_active()])

    @app.route("/api/notifications", methods=["POST"], endpoint="notifications_create")
    @admin_required
    def notifications_create(member):
        body = request.get_json(silent=True) or {}
        notification = notifications.create_notification(
            title=body.get("title"),
            content=body.get("content"),
            type=body.get("type"),
            event_type=body.get("eventType"),
            event_custom=body.get("eventCustom"),
            expires_at=body.get("expiresAt"),
            poll_options=body.get("pollOptions"),
            created_by_id=member.member_id,
        )
        return jsonify(notification.to_dict()), 201

    @app.route("/api/notifications/<notification_id>", methods=["DELETE"], endpoint="notifications_delete")
    @admin_required
    def notifications_delete(member, notification_id: str):
        notifications.deactivate(notification_id)
        return "", 204

    @app.route("/api/polls/active", methods=["GET"], endpoint="polls_active")
    @login_required
    def polls_active(member):
        return jsonify([p.to_dict() for p in polls.active_polls_with_responses()])

    @app.route("/api/polls/results", methods=["GET"], endpoint="polls_results")
    @admin_required
    def polls_results(member):
        return jsonify([p.to_dict() for p in polls.all_polls_with_responses()])

    @app.route("/api/polls/<poll_id>/tally", methods=["GET"], endpoint="polls_tally")
    @admin_required
    def polls_tally(member, poll_id: str):
        return jsonify(polls.results(poll_id).to_dict())

    @app.route("/api/polls/by-notification/<notification_id>", methods=["GET"], endpoint="polls_by_notification")
    @login_required
    def polls_by_notification(member, notification_id: str):
        poll = polls.poll_for_notification(notification_id)
        return jsonify(poll.to_dict() if poll else None)

    @app.route("/api/polls", methods=["POST"], endpoint="polls_create")
    @admin_required
    def polls_create(member):
        body = request.get_json(silent=True) or {}
        poll = polls.create_poll(
            question=body.get("question"),
            options=body.get("options"),
            notification_id=body.get("notificationId"),
            created_by_id=member.member_id,
            expires_at=body.get("expiresAt"),
        )
        return jsonify(poll.to_dict()), 201

    @app.route("/api/polls/<poll_id>/respond", methods=["POST"], endpoint="polls_respond")
    @login_required
    def polls_respond(member, poll_id: str):
        body = request.get_json(silent=True) or {}
        response = polls.respond(poll_id, member_id=member.member_id, selected_option=body.get("selectedOption"))
        return jsonify(response.to_dict()), 201

    @app.route("/api/polls/export", methods=["POST"], endpoint="polls_export")
    @admin_required
    def polls_export(member):
        body = request.get_json(silent=True) or {}
        export = container.export_service.export_poll(body.get("pollId") or "", body.get("format"))
        return send_file(
            io.BytesIO(export.content),
            mimetype=export.mimetype,
            as_attachment=True,
            download_name=export.filename,
        )
