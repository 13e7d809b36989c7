from __future__ import annotations

import io
from datetime import date
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..common.datetime_utils import format_clock, format_day
from ..core.constants import EXPORT_FILENAME_PREFIX, EXPORT_HEADER
from .model import DateGroup

_NEEDS_QUOTES = (",", '"', "\n", "\r")


def _quoted(value: object) -> str:
    return '"' + str(value).replace('"', '""') + '"'


def _plain(value: object) -> str:
    text = str(value)
    if any(ch in text for ch in _NEEDS_QUOTES):
        return _quoted(text)
    return text


def group_by_date(records: Iterable[AttendanceRecord]) -> dict[date, DateGroup]:
    """Partition records by work date.

    Buckets appear in first-seen order and keep the input order inside each
    bucket, so a newest-first listing yields newest days first.
    """

    groups: dict[date, DateGroup] = {}
    for record in records:
        group = groups.get(record.work_date)
        if group is None:
            group = DateGroup(work_date=record.work_date)
            groups[record.work_date] = group
        group.records.append(record)
    return groups


def _summary_row(work_date: date, count: int) -> dict:
    return {"work_date": work_date.isoformat(), "date": format_day(work_date), "count": count}


def daily_summary(records: Iterable[AttendanceRecord]) -> list[dict]:
    return [_summary_row(d, g.count) for d, g in group_by_date(records).items()]


def export_csv(records: Sequence[AttendanceRecord]) -> str:
    """Render records as CSV: ID,Name,Date,Time,Position,Description,Location.

    Free-text columns are always quoted with embedded quotes doubled; the
    remaining columns are quoted only when they contain a delimiter.
    """

    out = io.StringIO()
    out.write(",".join(EXPORT_HEADER) + "\n")
    for r in records:
        row = [
            _plain(r.user_id),
            _quoted(r.user_name),
            _plain(format_day(r.work_date)),
            _plain(format_clock(r.check_in_time)),
            _quoted(r.position),
            _quoted(r.description),
            _quoted(r.location),
        ]
        out.write(",".join(row) + "\n")
    return out.getvalue()


def export_tabular(work_date: date, records: Iterable[AttendanceRecord]) -> str:
    """CSV for one day; records dated otherwise are left out."""

    return export_csv([r for r in records if r.work_date == work_date])


def export_filename(work_date: date) -> str:
    return f"{EXPORT_FILENAME_PREFIX}{format_day(work_date).replace('/', '-')}.csv"


class ReportService:
    """Daily report browsing and export on top of the attendance listing."""

    def __init__(self, attendance_service: AttendanceService):
        self._attendance = attendance_service

    def daily_index(self) -> list[dict]:
        # counted in the store
        return [_summary_row(d, n) for d, n in self._attendance.count_by_date()]

    def records_for_date(self, work_date: date) -> list[AttendanceRecord]:
        return list(self._attendance.list_for_date(work_date))

    def export_date(self, work_date: date) -> tuple[str, str]:
        """Return (filename, csv_text) for one day."""

        return export_filename(work_date), export_tabular(work_date, self.records_for_date(work_date))
