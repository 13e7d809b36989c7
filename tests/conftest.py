from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

import pytest

from src.field_attendance.field_attendance.attendance.model import AttendanceRecord, GeoPoint
from src.field_attendance.field_attendance.audit.model import Comment
from src.field_attendance.field_attendance.container import assemble
from src.field_attendance.field_attendance.core.exceptions import DuplicateIdentifier
from src.field_attendance.field_attendance.tokens.model import DailyToken
from src.field_attendance.field_attendance.users.model import User


class InMemoryUsers:
    def __init__(self):
        self.users: dict[str, User] = {}

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def create_user(self, user: User) -> None:
        if user.user_id in self.users:
            raise DuplicateIdentifier(f"NIP {user.user_id} sudah terdaftar")
        self.users[user.user_id] = user

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        user = self.users.get(user_id)
        if not user:
            return False
        self.users[user_id] = User(user_id=user.user_id, name=user.name, password_hash=password_hash, role=user.role)
        return True

    def delete_by_id(self, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None

    def list_all(self):
        return [self.users[k] for k in sorted(self.users)]


class InMemoryTokens:
    def __init__(self):
        self.tokens: dict[date, DailyToken] = {}
        self.inserts = 0

    def get_for_date(self, token_date: date) -> Optional[DailyToken]:
        return self.tokens.get(token_date)

    def create_if_absent(self, token: DailyToken) -> bool:
        if token.token_date in self.tokens:
            return False
        self.inserts += 1
        self.tokens[token.token_date] = token
        return True


class InMemoryComments:
    def __init__(self):
        self.by_record: dict[int, list[Comment]] = {}
        self._id = 0

    def append(self, *, attendance_id, admin_id, admin_name, text, created_at) -> Optional[Comment]:
        if attendance_id not in self.by_record:
            return None
        self._id += 1
        comment = Comment(
            comment_id=self._id,
            admin_id=admin_id,
            admin_name=admin_name,
            text=text,
            created_at=created_at,
        )
        self.by_record[attendance_id].append(comment)
        return comment

    def list_for_attendance(self, attendance_id: int):
        return list(self.by_record.get(attendance_id, []))


class InMemoryAttendance:
    def __init__(self, comments: InMemoryComments):
        self._comments = comments
        self._rows: dict[int, AttendanceRecord] = {}
        self._id = 0

    def create(self, *, user_id, user_name, work_date, check_in_time, position, photo, description, location) -> int:
        self._id += 1
        self._rows[self._id] = AttendanceRecord(
            attendance_id=self._id,
            user_id=user_id,
            user_name=user_name,
            work_date=work_date,
            check_in_time=check_in_time,
            position=position,
            photo=photo,
            description=description,
            location=location,
        )
        self._comments.by_record[self._id] = []
        return self._id

    def _attach(self, record: AttendanceRecord) -> AttendanceRecord:
        return record.with_comments(self._comments.list_for_attendance(record.attendance_id))

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        record = self._rows.get(int(attendance_id))
        return self._attach(record) if record else None

    def list_all(self):
        return [self._attach(self._rows[k]) for k in sorted(self._rows, reverse=True)]

    def list_for_user(self, user_id: str):
        return [r for r in self.list_all() if r.user_id == user_id]

    def list_for_date(self, work_date: date):
        return [r for r in self.list_all() if r.work_date == work_date]

    def count_by_date(self):
        counts: dict[date, int] = {}
        for r in sorted(self._rows.values(), key=lambda r: r.attendance_id, reverse=True):
            counts[r.work_date] = counts.get(r.work_date, 0) + 1
        return list(counts.items())


def make_record(attendance_id: int, user_id: str, work_date: date, **overrides) -> AttendanceRecord:
    fields = dict(
        attendance_id=attendance_id,
        user_id=user_id,
        user_name=f"User {user_id}",
        work_date=work_date,
        check_in_time=time(8, 0, 0),
        position="Staff",
        photo="data:image/jpeg;base64,AAAA",
        description="Patrol",
        location=GeoPoint(lat=-6.2, lng=106.8),
    )
    fields.update(overrides)
    return AttendanceRecord(**fields)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 5, 10, 8, 15, 30)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def tokens_repo() -> InMemoryTokens:
    return InMemoryTokens()


@pytest.fixture
def comments_repo() -> InMemoryComments:
    return InMemoryComments()


@pytest.fixture
def attendance_repo(comments_repo) -> InMemoryAttendance:
    return InMemoryAttendance(comments_repo)


@pytest.fixture
def container(users_repo, tokens_repo, attendance_repo, comments_repo):
    return assemble(
        users_repo=users_repo,
        tokens_repo=tokens_repo,
        attendance_repo=attendance_repo,
        comments_repo=comments_repo,
    )


@pytest.fixture
def record_factory():
    return make_record
