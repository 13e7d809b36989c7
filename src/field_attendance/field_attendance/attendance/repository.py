from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, GeoPoint


class AttendanceRepository(Protocol):
    def create(
        self,
        *,
        user_id: str,
        user_name: str,
        work_date: date,
        check_in_time: time,
        position: str,
        photo: str,
        description: str,
        location: GeoPoint,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        """All records, most recently created first, comments attached."""

        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_by_date(self) -> Sequence[tuple[date, int]]:
        """(work_date, record count) per day, the day with the latest record first."""

        raise NotImplementedError
