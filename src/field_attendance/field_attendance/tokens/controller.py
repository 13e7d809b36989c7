from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.datetime_utils import format_day, today_local
from ..common.web import CHECKIN_PASS_KEY, admin_required, current_user_id, json_body, member_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/token", methods=["GET"], endpoint="admin_daily_token")
    @admin_required
    def admin_daily_token():
        today = today_local()
        code = container.token_service.get_or_create_today_code(today)
        return jsonify({"date": format_day(today), "code": code})

    @app.route("/api/checkin/unlock", methods=["POST"], endpoint="checkin_unlock")
    @member_required
    def checkin_unlock():
        data = json_body()
        checkin_pass = container.token_service.unlock(current_user_id(), str(data.get("code", "")))
        session[CHECKIN_PASS_KEY] = checkin_pass.to_session()
        return jsonify({"ok": True, "work_date": checkin_pass.work_date.isoformat()})
