from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..audit.mysql_comment_repository import load_comments
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord, GeoPoint
from .repository import AttendanceRepository

_SELECT = """
    SELECT attendance_id, user_id, user_name, work_date, check_in_time,
           position, photo, description, location_lat, location_lng
    FROM attendance_records
"""
_ORDER = " ORDER BY created_at DESC, attendance_id DESC"


def _row_to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["attendance_id"]),
        user_id=str(row["user_id"]),
        user_name=row["user_name"],
        work_date=row["work_date"],
        check_in_time=normalize_mysql_time(row["check_in_time"]),
        position=row["position"],
        photo=row["photo"],
        description=row["description"],
        location=GeoPoint(lat=float(row["location_lat"]), lng=float(row["location_lng"])),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _query(self, where: str = "", params: tuple = ()) -> list[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + _ORDER, params)
            records = [_row_to_record(r) for r in fetchall(cur)]
            comments = load_comments(cur, [r.attendance_id for r in records])
            return [r.with_comments(comments.get(r.attendance_id, [])) for r in records]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    user_id, user_name, work_date, check_in_time,
                    position, photo, description, location_lat, location_lng
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user_id,
                    user_name,
                    work_date,
                    check_in_time,
                    position,
                    photo,
                    description,
                    location.lat,
                    location.lng,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE attendance_id=%s", (int(attendance_id),))
            row = fetchone(cur)
            if not row:
                return None
            record = _row_to_record(row)
            comments = load_comments(cur, [record.attendance_id])
            return record.with_comments(comments.get(record.attendance_id, []))

    def list_all(self) -> Sequence[AttendanceRecord]:
        return self._query()

    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        return self._query(" WHERE user_id=%s", (user_id,))

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self._query(" WHERE work_date=%s", (work_date,))

    def count_by_date(self) -> Sequence[tuple[date, int]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT work_date, COUNT(*) AS total
                FROM attendance_records
                GROUP BY work_date
                ORDER BY MAX(created_at) DESC, MAX(attendance_id) DESC
                """
            )
            return [(r["work_date"], int(r["total"])) for r in fetchall(cur)]
