from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.validators import is_blank
from ..core.exceptions import EmptyComment, RecordNotFound
from .model import Comment
from .repository import CommentRepository

logger = logging.getLogger(__name__)


class AuditTrailService:
    """Append-only administrator comments on attendance records.

    Each append is a single insert at the store, so two admins commenting on
    the same record at once both keep their comment.
    """

    def __init__(self, comments: CommentRepository, attendance: AttendanceRepository):
        self._comments = comments
        self._attendance = attendance

    def append_comment(
        self,
        *,
        attendance_id: int,
        admin_id: str,
        admin_name: str,
        text: str,
        now: Optional[datetime] = None,
    ) -> Sequence[Comment]:
        if is_blank(text):
            raise EmptyComment("Komentar tidak boleh kosong")
        if not self._attendance.get_by_id(attendance_id):
            raise RecordNotFound("Data absensi tidak ditemukan")

        comment = self._comments.append(
            attendance_id=attendance_id,
            admin_id=admin_id,
            admin_name=admin_name,
            text=text.strip(),
            created_at=(now or now_local()).replace(microsecond=0),
        )
        if comment is None:
            # Record vanished between the lookup and the insert.
            raise RecordNotFound("Data absensi tidak ditemukan")

        logger.info(
            "audit_comment_added",
            extra={"attendance_id": attendance_id, "admin_id": admin_id, "comment_id": comment.comment_id},
        )
        return self._comments.list_for_attendance(attendance_id)
