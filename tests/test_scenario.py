"""End-to-end walk through the services: provision, code, check-in, audit, export."""

from __future__ import annotations

from datetime import date, datetime

from src.field_attendance.field_attendance.core.enums import Role
from src.field_attendance.field_attendance.reports.service import export_filename, export_tabular, group_by_date


def test_member_day_from_code_to_export(container):
    day = date(2024, 5, 10)
    now = datetime(2024, 5, 10, 7, 45, 0)

    jane = container.user_service.provision(user_id="M001", name="Jane", role=Role.MEMBER)
    boss = container.user_service.provision(user_id="A001", name="Boss", role=Role.ADMIN)
    assert len(jane.password) == 6

    code = container.token_service.get_or_create_today_code(day)
    assert container.token_service.get_or_create_today_code(day) == code

    user = container.auth_service.authenticate("M001", jane.password, Role.MEMBER)
    checkin_pass = container.token_service.unlock(user.user_id, code, day)
    record = container.attendance_service.submit(
        checkin_pass=checkin_pass,
        user_id=user.user_id,
        user_name=user.name,
        position="Staff",
        description="Patrol",
        photo="data:image/jpeg;base64,AAAA",
        location=(-6.2, 106.8),
        now=now,
    )
    assert record.work_date == day

    admin = container.auth_service.authenticate("A001", boss.password, Role.ADMIN)
    comments = container.audit_service.append_comment(
        attendance_id=record.attendance_id,
        admin_id=admin.user_id,
        admin_name=admin.name,
        text="Confirmed on-site",
    )
    assert [(c.admin_id, c.admin_name, c.text) for c in comments] == [("A001", "Boss", "Confirmed on-site")]

    groups = group_by_date(container.attendance_service.list())
    assert groups[day].count == 1
    assert len(groups[day].records[0].comments) == 1

    lines = export_tabular(day, groups[day].records).splitlines()
    assert lines[1] == 'M001,"Jane",10/5/2024,07.45.00,"Staff","Patrol","-6.2, 106.8"'
    assert export_filename(day) == "Attendance_10-5-2024.csv"
