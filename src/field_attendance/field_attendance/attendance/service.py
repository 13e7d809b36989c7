from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import as_finite_float, is_blank
from ..core.exceptions import CheckinLocked, IncompleteSubmission, RecordNotFound
from ..tokens.model import CheckinPass
from .model import AttendanceRecord, GeoPoint
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def coerce_location(value: Any) -> Optional[GeoPoint]:
    """Accept a GeoPoint, a (lat, lng) pair or a {"lat", "lng"} mapping.

    Returns None unless both coordinates are finite and inside the valid
    latitude/longitude ranges.
    """

    if isinstance(value, GeoPoint):
        lat, lng = value.lat, value.lng
    elif isinstance(value, dict):
        lat, lng = value.get("lat"), value.get("lng")
    elif isinstance(value, (tuple, list)) and len(value) == 2:
        lat, lng = value
    else:
        return None

    lat_f = as_finite_float(lat)
    lng_f = as_finite_float(lng)
    if lat_f is None or lng_f is None:
        return None
    if not (-90.0 <= lat_f <= 90.0 and -180.0 <= lng_f <= 180.0):
        return None
    return GeoPoint(lat=lat_f, lng=lng_f)


class AttendanceService:
    """Creates and lists check-ins.

    Several check-ins by the same user on the same day are allowed; limiting
    that is left to whoever hands out CheckinPass objects.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def submit(
        self,
        *,
        checkin_pass: Optional[CheckinPass],
        user_id: str,
        user_name: str,
        position: str,
        description: str,
        photo: str,
        location: Any,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        if (
            checkin_pass is None
            or checkin_pass.user_id != user_id
            or checkin_pass.work_date != today
        ):
            raise CheckinLocked("Masukkan token hari ini terlebih dahulu")

        point = coerce_location(location)
        if is_blank(position) or is_blank(description) or is_blank(photo) or point is None:
            raise IncompleteSubmission("Mohon lengkapi data!")

        check_in_time = now.time().replace(microsecond=0)
        attendance_id = self._attendance.create(
            user_id=user_id,
            user_name=user_name,
            work_date=today,
            check_in_time=check_in_time,
            position=position,
            photo=photo,
            description=description,
            location=point,
        )
        logger.info(
            "checkin_recorded",
            extra={"attendance_id": attendance_id, "user_id": user_id, "work_date": today.isoformat()},
        )

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            user_name=user_name,
            work_date=today,
            check_in_time=check_in_time,
            position=position,
            photo=photo,
            description=description,
            location=point,
        )

    def list(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()

    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user(user_id)

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(work_date)

    def count_by_date(self) -> Sequence[tuple[date, int]]:
        return self._attendance.count_by_date()

    def get(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise RecordNotFound("Data absensi tidak ditemukan")
        return record
