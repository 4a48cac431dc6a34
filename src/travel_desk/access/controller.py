from __future__ import annotations

import logging

from flask import Flask, flash, get_flashed_messages, jsonify, redirect, request

from ..common.validators import require_json_object
from ..container import Container
from ..core.enums import DecisionKind, DenyReason
from ..core.exceptions import ValidationError
from ..users.serialization import user_to_dict
from .model import Decision
from .route_table import PAGE_SECTIONS
from .resolver import home_path_for, resolve_effective_role

logger = logging.getLogger(__name__)

API_PREFIX = "/api/"

_DENY_STATUS = {
    DenyReason.UNAUTHENTICATED: 401,
    DenyReason.FORBIDDEN: 403,
    DenyReason.NOT_FOUND: 404,
}


def _api_response(decision: Decision):
    status = _DENY_STATUS.get(decision.reason, 403)
    return jsonify({"message": decision.message, **decision.to_dict()}), status


def _page_response(decision: Decision):
    if decision.kind == DecisionKind.REDIRECT:
        return redirect(decision.target)
    if decision.reason == DenyReason.NOT_FOUND:
        return jsonify({"message": decision.message, **decision.to_dict()}), 404

    category = "warning" if decision.reason == DenyReason.UNAUTHENTICATED else "danger"
    flash(decision.message, category)
    return redirect(decision.target)


def register(app: Flask, container: Container) -> None:
    identity = container.identity
    access = container.access_controller

    @app.before_request
    def enforce_access():
        # Decided fresh on every request from the user record read for it.
        user = identity.get_current_user()
        decision = access.check(user, request.path)
        if decision.allowed:
            return None

        if decision.kind == DecisionKind.DENY:
            logger.info(
                "Denied %s %s for user %s (%s)",
                request.method,
                request.path,
                user.id if user else "-",
                decision.reason.value,
            )

        if request.path.startswith(API_PREFIX):
            return _api_response(decision)
        return _page_response(decision)

    def _section_view(path: str):
        def view():
            user = identity.get_current_user()
            return jsonify(
                {
                    "section": path,
                    "user": user_to_dict(user),
                    "notices": [
                        {"category": category, "message": message}
                        for category, message in get_flashed_messages(with_categories=True)
                    ],
                }
            )

        return view

    for section in PAGE_SECTIONS:
        endpoint = "section_" + section.path.strip("/").replace("/", "_")
        app.add_url_rule(section.path, endpoint=endpoint, view_func=_section_view(section.path))

    @app.route("/login", methods=["GET"], endpoint="login_page")
    def login_page():
        return jsonify(
            {
                "section": "/login",
                "login_endpoint": "/api/login",
                "notices": [
                    {"category": category, "message": message}
                    for category, message in get_flashed_messages(with_categories=True)
                ],
            }
        )

    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    def dashboard():
        user = identity.get_current_user()
        effective_role = resolve_effective_role(user)
        return jsonify(
            {
                "effective_role": effective_role.value,
                "home": home_path_for(effective_role),
                "is_admin": user.is_admin,
            }
        )

    @app.route("/api/access", methods=["GET"], endpoint="api_access")
    def access_probe():
        path = (request.args.get("path") or "").strip()
        if not path.startswith("/"):
            raise ValidationError("Query parameter 'path' must be an absolute path")
        decision = access.check(identity.get_current_user(), path)
        resp = jsonify({"path": path, **decision.to_dict()})
        resp.headers["Cache-Control"] = "no-store"
        return resp

    @app.route("/api/admin/switch-role", methods=["POST"], endpoint="api_switch_role")
    def switch_role():
        data = require_json_object(request.get_json(silent=True))
        try:
            user = container.role_switch_service.switch_role(
                requesting_user=identity.get_current_user(),
                target_role=data.get("role"),
            )
        finally:
            # Whatever happened, nothing read before the switch may be reused.
            identity.invalidate()

        resp = jsonify(
            {
                "message": "Role switched successfully",
                "user": user_to_dict(user),
                "refetch": ["/api/user"],
            }
        )
        resp.headers["Cache-Control"] = "no-store"
        return resp
