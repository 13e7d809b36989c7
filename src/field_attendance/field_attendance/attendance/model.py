from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from typing import Any

from ..audit.model import Comment
from ..common.datetime_utils import format_clock, format_day


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float

    def __str__(self) -> str:
        return f"{_fmt_coord(self.lat)}, {_fmt_coord(self.lng)}"


def _fmt_coord(value: float) -> str:
    # 106.0 -> "106", 1e-05 -> "0.00001"
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return format(Decimal(repr(number)), "f")


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in.

    ``user_name`` and ``position`` are snapshots taken at submission and are
    not kept in sync with the user directory.
    """

    attendance_id: int
    user_id: str
    user_name: str
    work_date: date
    check_in_time: time
    position: str
    photo: str
    description: str
    location: GeoPoint
    comments: tuple[Comment, ...] = field(default_factory=tuple)

    def with_comments(self, comments) -> "AttendanceRecord":
        return AttendanceRecord(
            attendance_id=self.attendance_id,
            user_id=self.user_id,
            user_name=self.user_name,
            work_date=self.work_date,
            check_in_time=self.check_in_time,
            position=self.position,
            photo=self.photo,
            description=self.description,
            location=self.location,
            comments=tuple(comments),
        )

    def to_dict(self, *, include_photo: bool = True) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.attendance_id,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "date": format_day(self.work_date),
            "work_date": self.work_date.isoformat(),
            "time": format_clock(self.check_in_time),
            "position": self.position,
            "description": self.description,
            "location": {"lat": self.location.lat, "lng": self.location.lng},
            "comments": [c.to_dict() for c in self.comments],
        }
        if include_photo:
            out["photo"] = self.photo
        return out
