from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyToken:
    """The check-in code for one calendar day. Never regenerated."""

    token_date: date
    code: str


@dataclass(frozen=True)
class CheckinPass:
    """Proof that ``user_id`` entered the right code on ``work_date``.

    Handed to AttendanceService.submit; the web session drops it after one
    successful check-in.
    """

    user_id: str
    work_date: date

    def to_session(self) -> dict:
        return {"user_id": self.user_id, "work_date": self.work_date.isoformat()}

    @classmethod
    def from_session(cls, data: dict | None) -> "CheckinPass | None":
        if not data:
            return None
        try:
            return cls(user_id=str(data["user_id"]), work_date=date.fromisoformat(data["work_date"]))
        except (KeyError, TypeError, ValueError):
            return None
