from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import CHECKIN_PASS_KEY, admin_required, current_user_id, json_body, member_required
from ..container import Container
from ..tokens.model import CheckinPass


def register(app: Flask, container: Container) -> None:
    @app.route("/api/checkin", methods=["POST"], endpoint="checkin")
    @member_required
    def checkin():
        data = json_body()
        location = data.get("location")
        if location is None:
            location = (data.get("lat"), data.get("lng"))

        record = container.attendance_service.submit(
            checkin_pass=CheckinPass.from_session(session.get(CHECKIN_PASS_KEY)),
            user_id=current_user_id(),
            user_name=str(session.get("name", "")),
            position=str(data.get("position") or ""),
            description=str(data.get("description") or ""),
            photo=str(data.get("photo") or ""),
            location=location,
        )
        # One pass, one check-in.
        session.pop(CHECKIN_PASS_KEY, None)
        return jsonify({"record": record.to_dict(include_photo=False), "message": "Absensi Berhasil Terkirim!"}), 201

    @app.route("/api/me/attendance", methods=["GET"], endpoint="my_attendance")
    @member_required
    def my_attendance():
        records = container.attendance_service.list_for_user(current_user_id())
        return jsonify({"records": [r.to_dict() for r in records]})

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_detail")
    @admin_required
    def attendance_detail(attendance_id: int):
        return jsonify({"record": container.attendance_service.get(attendance_id).to_dict()})
