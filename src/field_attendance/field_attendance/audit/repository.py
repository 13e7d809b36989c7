from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Comment


class CommentRepository(Protocol):
    """Append-only storage for audit comments.

    There is no update or delete: ``append`` is the only write.
    """

    def append(
        self,
        *,
        attendance_id: int,
        admin_id: str,
        admin_name: str,
        text: str,
        created_at: datetime,
    ) -> Optional[Comment]:
        """Store one comment atomically; None when the record does not exist."""

        raise NotImplementedError

    def list_for_attendance(self, attendance_id: int) -> Sequence[Comment]:
        raise NotImplementedError
