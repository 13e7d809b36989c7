from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.field_attendance.field_attendance.audit.service import AuditTrailService
from src.field_attendance.field_attendance.core.exceptions import EmptyComment, RecordNotFound


def _record_id(attendance_repo, work_date):
    return attendance_repo.create(
        user_id="M001",
        user_name="Jane",
        work_date=work_date,
        check_in_time=datetime(2024, 5, 10, 8, 0).time(),
        position="Staff",
        photo="data:image/jpeg;base64,AAAA",
        description="Patrol",
        location=None,
    )


def test_append_is_ordered_and_append_only(attendance_repo, comments_repo, fixed_now):
    rid = _record_id(attendance_repo, fixed_now.date())
    svc = AuditTrailService(comments_repo, attendance_repo)

    snapshots = []
    for i in range(5):
        comments = svc.append_comment(
            attendance_id=rid,
            admin_id="A001",
            admin_name="Boss",
            text=f"note {i}",
            now=fixed_now + timedelta(minutes=i),
        )
        snapshots.append(list(comments))

    final = attendance_repo.get_by_id(rid).comments
    assert [c.text for c in final] == [f"note {i}" for i in range(5)]
    # Earlier comments are untouched by later appends.
    for n, snap in enumerate(snapshots, start=1):
        assert len(snap) == n
        assert list(final[:n]) == snap


def test_comment_carries_admin_identity_and_timestamp(attendance_repo, comments_repo, fixed_now):
    rid = _record_id(attendance_repo, fixed_now.date())
    comments = AuditTrailService(comments_repo, attendance_repo).append_comment(
        attendance_id=rid, admin_id="A001", admin_name="Boss", text="  Confirmed on-site ", now=fixed_now
    )

    (c,) = comments
    assert c.admin_id == "A001"
    assert c.admin_name == "Boss"
    assert c.text == "Confirmed on-site"
    assert c.created_at == datetime(2024, 5, 10, 8, 15, 30)


def test_missing_record(attendance_repo, comments_repo):
    svc = AuditTrailService(comments_repo, attendance_repo)
    with pytest.raises(RecordNotFound):
        svc.append_comment(attendance_id=404, admin_id="A001", admin_name="Boss", text="hi")


@pytest.mark.parametrize("text", ["", "   ", None])
def test_blank_comment(attendance_repo, comments_repo, fixed_now, text):
    rid = _record_id(attendance_repo, fixed_now.date())
    svc = AuditTrailService(comments_repo, attendance_repo)

    with pytest.raises(EmptyComment):
        svc.append_comment(attendance_id=rid, admin_id="A001", admin_name="Boss", text=text)
    assert comments_repo.list_for_attendance(rid) == []


def test_record_removed_between_lookup_and_insert(attendance_repo, comments_repo, fixed_now):
    rid = _record_id(attendance_repo, fixed_now.date())

    class VanishingComments(type(comments_repo)):
        def append(self, **kwargs):
            return None

    with pytest.raises(RecordNotFound):
        AuditTrailService(VanishingComments(), attendance_repo).append_comment(
            attendance_id=rid, admin_id="A001", admin_name="Boss", text="hi"
        )
