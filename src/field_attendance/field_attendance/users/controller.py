from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import CHECKIN_PASS_KEY, admin_required, current_user_id, json_body, login_required
from ..core.enums import Role
from ..core.exceptions import InvalidCredentials, ValidationError
from ..container import Container
from .model import User

logger = logging.getLogger(__name__)


def _user_view(user: User) -> dict:
    return {"user_id": user.user_id, "name": user.name, "role": user.role.value}


def _parse_role(value, *, default: Role | None = None) -> Role:
    if not value and default is not None:
        return default
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Role tidak valid")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        try:
            role = _parse_role(data.get("role"))
        except ValidationError:
            raise InvalidCredentials("NIP atau Password salah")

        user = container.auth_service.authenticate(
            str(data.get("user_id", "")), str(data.get("password", "")), role
        )

        session.clear()
        session.permanent = bool(data.get("remember"))
        session["user_id"] = user.user_id
        session["name"] = user.name
        session["role"] = user.role.value

        logger.info("login_ok", extra={"user_id": user.user_id, "role": user.role.value})
        return jsonify({"user": _user_view(user)})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "user": {"user_id": session["user_id"], "name": session.get("name"), "role": session.get("role")},
                "checkin_unlocked": CHECKIN_PASS_KEY in session,
            }
        )

    @app.route("/api/me/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = json_body()
        container.user_service.change_password(
            user_id=current_user_id(),
            old_password=str(data.get("old_password", "")),
            new_password=str(data.get("new_password", "")),
            confirm_password=data.get("confirm_password"),
        )
        return jsonify({"ok": True, "message": "Password berhasil diubah!"})

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        return jsonify({"users": [_user_view(u) for u in container.user_service.list_users()]})

    @app.route("/api/admin/users", methods=["POST"], endpoint="add_user")
    @admin_required
    def add_user():
        data = json_body()
        created = container.user_service.provision(
            user_id=str(data.get("user_id", "")),
            name=str(data.get("name", "")),
            role=_parse_role(data.get("role"), default=Role.MEMBER),
        )
        return jsonify({"user": _user_view(created.user), "password": created.password}), 201

    @app.route("/api/admin/users/import", methods=["POST"], endpoint="import_users")
    @admin_required
    def import_users():
        upload = request.files.get("file")
        if upload is not None:
            text = upload.read().decode("utf-8-sig", errors="replace")
        else:
            text = request.get_data(as_text=True)

        result = container.user_service.import_csv(text)
        return jsonify(
            {
                "count": result.count,
                "created": [{**_user_view(p.user), "password": p.password} for p in result.created],
                "skipped": [{"user_id": row.user_id, "reason": reason} for row, reason in result.skipped],
                "message": f"Berhasil import {result.count} user.",
            }
        )

    @app.route("/api/admin/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: str):
        removed = container.user_service.remove(user_id)
        return jsonify({"ok": True, "removed": removed})
