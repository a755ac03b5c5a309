"""Session guards and the JSON error contract shared by every controller."""

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import Flask, current_app, jsonify, session

from ..container import Container
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..members.model import Member

SESSION_MEMBER_KEY = "member_id"


def json_error(message: str, status: int):
    return jsonify({"message": message}), status


def current_member(container: Container) -> Optional[Member]:
    member_id = session.get(SESSION_MEMBER_KEY)
    if not member_id:
        return None
    return container.members_repo.get_by_id(member_id)


def make_guards(container: Container):
    """Build (login_required, admin_required) bound to this container.

    Both pass the resolved Member into the view as `member`.
    """

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            member = current_member(container)
            if not member:
                return json_error("Unauthorized", 401)
            return view(*args, member=member, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            member = current_member(container)
            if not member:
                return json_error("Unauthorized", 401)
            if not member.is_admin:
                return json_error("Forbidden", 403)
            return view(*args, member=member, **kwargs)

        return wrapper

    return login_required, admin_required


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return json_error(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return json_error(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e: AuthorizationError):
        return json_error(str(e) or "Forbidden", 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return json_error(str(e), 404)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return json_error(str(e), 400)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        # HTTP errors raised by Flask itself (404 for unknown routes, 405, ...) keep their status.
        code = getattr(e, "code", None)
        if isinstance(code, int) and 400 <= code < 500:
            return json_error(getattr(e, "description", "Request failed"), code)
        current_app.logger.exception("unhandled error")
        return json_error("Internal server error", 500)
