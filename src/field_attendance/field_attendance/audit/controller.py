from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import admin_required, current_user_id, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/attendance/<int:attendance_id>/comments", methods=["POST"], endpoint="add_comment")
    @admin_required
    def add_comment(attendance_id: int):
        data = json_body()
        comments = container.audit_service.append_comment(
            attendance_id=attendance_id,
            admin_id=current_user_id(),
            admin_name=str(session.get("name", "")),
            text=str(data.get("text") or ""),
        )
        return jsonify({"comments": [c.to_dict() for c in comments], "message": "Komentar terkirim."}), 201
