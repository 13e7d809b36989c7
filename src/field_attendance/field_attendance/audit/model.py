from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Comment:
    """Administrator annotation on an attendance record. Immutable once stored."""

    comment_id: int
    admin_id: str
    admin_name: str
    text: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.comment_id,
            "admin_id": self.admin_id,
            "admin_name": self.admin_name,
            "text": self.text,
            "timestamp": self.created_at.isoformat(sep=" ", timespec="seconds"),
        }
