from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..web.auth import make_guards


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_guards(container)
    stories = container.story_service

    @app.route("/api/stories", methods=["GET"], endpoint="stories_list")
    @login_required
    def stories_list(member):
        return jsonify([s.to_dict() for s in stories.list_stories()])

    @app.route("/api/stories/with-characters", methods=["GET"], endpoint="stories_with_characters")
    @login_required
    def stories_with_characters(member):
        return jsonify([s.to_dict() for s in stories.list_with_characters()])

    @app.route("/api/stories", methods=["POST"], endpoint="stories_create")
    @admin_required
    def stories_create(member):
        body = request.get_json(silent=True) or {}
        story = stories.create_story(
            name=body.get("name"),
            description=body.get("description"),
            event_type=body.get("eventType"),
            event_custom=body.get("eventCustom"),
        )
        return jsonify(story.to_dict()), 201

    @app.route("/api/stories/<story_id>", methods=["PATCH"], endpoint="stories_update")
    @admin_required
    def stories_update(member, story_id: str):
        story = stories.update_story(story_id, request.get_json(silent=True) or {})
        return jsonify(story.to_dict())

    @app.route("/api/stories/<story_id>", methods=["DELETE"], endpoint="stories_delete")
    @admin_required
    def stories_delete(member, story_id: str):
        stories.delete_story(story_id)
        return "", 204

    @app.route("/api/stories/<story_id>/characters", methods=["GET"], endpoint="characters_list")
    @login_required
    def characters_list(member, story_id: str):
        return jsonify([c.to_dict() for c in stories.list_characters(story_id)])

    @app.route("/api/stories/<story_id>/characters", methods=["POST"], endpoint="characters_create")
    @admin_required
    def characters_create(member, story_id: str):
        body = request.get_json(silent=True) or {}
        character = stories.add_character(story_id, body.get("name"))
        return jsonify(character.to_dict()), 201

    @app.route("/api/characters/<character_id>", methods=["DELETE"], endpoint="characters_delete")
    @admin_required
    def characters_delete(member, character_id: str):
        stories.delete_character(character_id)
        return "", 204

    @app.route("/api/roles", methods=["GET"], endpoint="roles_list")
    @login_required
    def roles_list(member):
        return jsonify([r.to_dict() for r in stories.list_roles()])

    @app.route("/api/practice-links", methods=["GET"], endpoint="practice_links_list")
    @login_required
    def practice_links_list(member):
        return jsonify([link.to_dict() for link in stories.list_practice_links()])

    @app.route("/api/practice-links", methods=["POST"], endpoint="practice_links_create")
    @admin_required
    def practice_links_create(member):
        body = request.get_json(silent=True) or {}
        link = stories.create_practice_link(
            story_id=body.get("storyId"),
            title=body.get("title"),
            url=body.get("url"),
            created_by_id=member.member_id,
        )
        return jsonify(link.to_dict()), 201

    @app.route("/api/practice-links/<link_id>", methods=["PATCH"], endpoint="practice_links_update")
    @admin_required
    def practice_links_update(member, link_id: str):
        link = stories.update_practice_link(link_id, request.get_json(silent=True) or {})
        return jsonify(link.to_dict())

    @app.route("/api/practice-links/<link_id>", methods=["DELETE"], endpoint="practice_links_delete")
    @admin_required
    def practice_links_delete(member, link_id: str):
        stories.delete_practice_link(link_id)
        return "", 204
