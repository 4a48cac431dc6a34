from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_json_object
from ..container import Container
from ..core.exceptions import AuthenticationError
from .serialization import user_to_dict


def register(app: Flask, container: Container) -> None:
    identity = container.identity

    def _payload() -> dict:
        return require_json_object(request.get_json(silent=True))

    def _current_user_or_401():
        user = identity.get_current_user()
        if user is None:
            raise AuthenticationError("Unauthorized")
        return user

    @app.route("/api/register", methods=["POST"], endpoint="api_register")
    def register_account():
        data = _payload()
        user = container.auth_service.register(
            email=data.get("email", ""),
            password=data.get("password", ""),
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            role=data.get("role", ""),
        )
        identity.login(user)
        return jsonify(user_to_dict(user)), 201

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def login():
        data = _payload()
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        identity.login(user)
        return jsonify(user_to_dict(user)), 200

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        identity.logout()
        return jsonify({"message": "Logged out"}), 200

    @app.route("/api/user", methods=["GET"], endpoint="api_user")
    def current_user():
        user = identity.get_current_user()
        if user is None:
            return jsonify({"message": "Unauthorized"}), 401
        resp = jsonify(user_to_dict(user))
        resp.headers["Cache-Control"] = "no-store"
        return resp

    @app.route("/api/change-password", methods=["POST"], endpoint="api_change_password")
    def change_password():
        data = _payload()
        container.auth_service.change_password(
            user=_current_user_or_401(),
            current_password=data.get("current_password", ""),
            new_password=data.get("new_password", ""),
        )
        return jsonify({"message": "Password changed successfully"}), 200

    @app.route("/api/users", methods=["GET"], endpoint="api_list_users")
    def list_users():
        users = container.user_service.list_users(current_user=_current_user_or_401())
        return jsonify([user_to_dict(u) for u in users])

    @app.route("/api/users", methods=["POST"], endpoint="api_create_user")
    def create_user():
        data = _payload()
        user = container.user_service.create_user(
            current_user=_current_user_or_401(),
            email=data.get("email", ""),
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            role=data.get("role", ""),
            annual_travel_budget=data.get("annual_travel_budget"),
            password=data.get("password"),
        )
        return jsonify(user_to_dict(user)), 201

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="api_update_user")
    def update_user(user_id: str):
        user = container.user_service.update_user(
            current_user=_current_user_or_401(),
            user_id=user_id,
            changes=_payload(),
        )
        return jsonify(user_to_dict(user))

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="api_delete_user")
    def delete_user(user_id: str):
        container.user_service.delete_user(current_user=_current_user_or_401(), user_id=user_id)
        return jsonify({"message": "User deleted successfully"})
