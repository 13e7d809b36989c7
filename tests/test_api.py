from __future__ import annotations

from datetime import date

import pytest

from src.field_attendance.field_attendance.common.datetime_utils import format_day
from src.field_attendance.field_attendance.core.enums import Role
from src.field_attendance.field_attendance.main import create_app


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def accounts(container):
    admin = container.user_service.provision(user_id="A001", name="Boss", role=Role.ADMIN)
    member = container.user_service.provision(user_id="M001", name="Jane", role=Role.MEMBER)
    return {"admin": admin.password, "member": member.password}


def _login(client, user_id, password, role):
    return client.post("/api/login", json={"user_id": user_id, "password": password, "role": role})


def _checkin_payload():
    return {
        "position": "Staff",
        "description": "Patrol",
        "photo": "data:image/jpeg;base64,AAAA",
        "location": {"lat": -6.2, "lng": 106.8},
    }


def test_login_wrong_role_is_rejected(app, accounts):
    client = app.test_client()
    resp = _login(client, "M001", accounts["member"], "admin")
    assert resp.status_code == 401
    assert resp.get_json()["error"]["code"] == "invalid_credentials"


def test_unauthenticated_access(app):
    resp = app.test_client().get("/api/me/attendance")
    assert resp.status_code == 401


def test_member_cannot_use_admin_routes(app, accounts):
    client = app.test_client()
    _login(client, "M001", accounts["member"], "member")
    assert client.get("/api/admin/token").status_code == 403
    assert client.get("/api/admin/users").status_code == 403


def test_full_checkin_and_audit_flow(app, accounts):
    admin = app.test_client()
    member = app.test_client()

    assert _login(admin, "A001", accounts["admin"], "admin").status_code == 200
    code = admin.get("/api/admin/token").get_json()["code"]
    assert len(code) == 4 and code.isdigit()
    assert admin.get("/api/admin/token").get_json()["code"] == code

    assert _login(member, "M001", accounts["member"], "member").status_code == 200

    locked = member.post("/api/checkin", json=_checkin_payload())
    assert locked.status_code == 403
    assert locked.get_json()["error"]["code"] == "checkin_locked"

    wrong = "1000" if code != "1000" else "1001"
    bad = member.post("/api/checkin/unlock", json={"code": wrong})
    assert bad.get_json()["error"]["code"] == "invalid_daily_code"

    assert member.post("/api/checkin/unlock", json={"code": code}).status_code == 200
    assert member.get("/api/me").get_json()["checkin_unlocked"] is True

    incomplete = member.post("/api/checkin", json={**_checkin_payload(), "photo": ""})
    assert incomplete.get_json()["error"]["code"] == "incomplete_submission"

    created = member.post("/api/checkin", json=_checkin_payload())
    assert created.status_code == 201
    record = created.get_json()["record"]
    assert record["user_id"] == "M001"
    assert record["user_name"] == "Jane"
    assert record["comments"] == []

    # The pass is spent by a successful check-in.
    again = member.post("/api/checkin", json=_checkin_payload())
    assert again.status_code == 403

    history = member.get("/api/me/attendance").get_json()["records"]
    assert [r["id"] for r in history] == [record["id"]]

    days = admin.get("/api/admin/reports/daily").get_json()["days"]
    assert len(days) == 1 and days[0]["count"] == 1
    work_date = days[0]["work_date"]

    commented = admin.post(
        f"/api/admin/attendance/{record['id']}/comments", json={"text": "Confirmed on-site"}
    )
    assert commented.status_code == 201
    (comment,) = commented.get_json()["comments"]
    assert comment["admin_id"] == "A001"
    assert comment["admin_name"] == "Boss"
    assert comment["text"] == "Confirmed on-site"

    detail = admin.get(f"/api/admin/attendance/{record['id']}").get_json()["record"]
    assert [c["text"] for c in detail["comments"]] == ["Confirmed on-site"]

    export = admin.get(f"/api/admin/reports/daily/{work_date}/export")
    assert export.status_code == 200
    assert export.mimetype == "text/csv"
    filename = f"Attendance_{format_day(date.fromisoformat(work_date)).replace('/', '-')}.csv"
    assert filename in export.headers["Content-Disposition"]
    lines = export.data.decode("utf-8-sig").splitlines()
    assert lines[0] == "ID,Name,Date,Time,Position,Description,Location"
    assert lines[1].startswith('M001,"Jane",')
    assert lines[1].endswith('"Staff","Patrol","-6.2, 106.8"')


def test_comment_errors(app, accounts):
    admin = app.test_client()
    _login(admin, "A001", accounts["admin"], "admin")

    missing = admin.post("/api/admin/attendance/999/comments", json={"text": "hi"})
    assert missing.status_code == 404
    assert missing.get_json()["error"]["code"] == "record_not_found"


def test_bad_report_date(app, accounts):
    admin = app.test_client()
    _login(admin, "A001", accounts["admin"], "admin")
    resp = admin.get("/api/admin/reports/daily/10-5-2024")
    assert resp.status_code == 400


def test_user_management(app, accounts, container):
    admin = app.test_client()
    _login(admin, "A001", accounts["admin"], "admin")

    added = admin.post("/api/admin/users", json={"user_id": "M002", "name": "John"})
    assert added.status_code == 201
    assert len(added.get_json()["password"]) == 6

    dup = admin.post("/api/admin/users", json={"user_id": "M002", "name": "John"})
    assert dup.status_code == 409
    assert dup.get_json()["error"]["code"] == "duplicate_identifier"

    imported = admin.post(
        "/api/admin/users/import",
        data="NIP,Nama,Role\nM003,Ana\nM002,John again\nA002,Chief,admin\n",
        content_type="text/csv",
    )
    body = imported.get_json()
    assert body["count"] == 2
    assert [s["user_id"] for s in body["skipped"]] == ["M002"]

    ids = [u["user_id"] for u in admin.get("/api/admin/users").get_json()["users"]]
    assert ids == ["A001", "A002", "M001", "M002", "M003"]

    assert admin.delete("/api/admin/users/M003").get_json()["removed"] is True
    assert "M003" not in container.users_repo.users


def test_change_password_endpoint(app, accounts):
    member = app.test_client()
    _login(member, "M001", accounts["member"], "member")

    short = member.post(
        "/api/me/password",
        json={"old_password": accounts["member"], "new_password": "abc", "confirm_password": "abc"},
    )
    assert short.get_json()["error"]["code"] == "password_too_short"

    ok = member.post(
        "/api/me/password",
        json={"old_password": accounts["member"], "new_password": "abcd", "confirm_password": "abcd"},
    )
    assert ok.status_code == 200

    member.post("/api/logout")
    assert _login(member, "M001", "abcd", "member").status_code == 200
