from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .audit.mysql_comment_repository import MySQLCommentRepository
from .audit.repository import CommentRepository
from .audit.service import AuditTrailService
from .core.constants import MIN_PASSWORD_LENGTH
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .tokens.mysql_token_repository import MySQLDailyTokenRepository
from .tokens.repository import DailyTokenRepository
from .tokens.service import DailyTokenService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    tokens_repo: DailyTokenRepository
    attendance_repo: AttendanceRepository
    comments_repo: CommentRepository

    auth_service: AuthService
    user_service: UserService
    token_service: DailyTokenService
    attendance_service: AttendanceService
    audit_service: AuditTrailService
    report_service: ReportService


def assemble(
    *,
    users_repo: UserRepository,
    tokens_repo: DailyTokenRepository,
    attendance_repo: AttendanceRepository,
    comments_repo: CommentRepository,
    conn: Optional[DatabaseConnection] = None,
    min_password_length: int = MIN_PASSWORD_LENGTH,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    attendance_service = AttendanceService(attendance_repo)
    return Container(
        conn=conn,
        users_repo=users_repo,
        tokens_repo=tokens_repo,
        attendance_repo=attendance_repo,
        comments_repo=comments_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, min_password_length=min_password_length),
        token_service=DailyTokenService(tokens_repo),
        attendance_service=attendance_service,
        audit_service=AuditTrailService(comments_repo, attendance_repo),
        report_service=ReportService(attendance_service),
    )


def build_container(*, db_config: dict, min_password_length: int = MIN_PASSWORD_LENGTH) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        tokens_repo=MySQLDailyTokenRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        comments_repo=MySQLCommentRepository(conn),
        min_password_length=min_password_length,
    )
