from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..attendance.model import AttendanceRecord


@dataclass
class DateGroup:
    """Read-model for the daily report: one calendar day and its check-ins."""

    work_date: date
    records: list[AttendanceRecord] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)
