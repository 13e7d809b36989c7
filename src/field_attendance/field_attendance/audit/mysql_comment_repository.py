from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Comment
from .repository import CommentRepository

_COLUMNS = "comment_id, attendance_id, admin_id, admin_name, text, created_at"


def row_to_comment(row: dict) -> Comment:
    return Comment(
        comment_id=int(row["comment_id"]),
        admin_id=str(row["admin_id"]),
        admin_name=row["admin_name"],
        text=row["text"],
        created_at=row["created_at"],
    )


def load_comments(cur, attendance_ids: Iterable[int]) -> dict[int, list[Comment]]:
    """Fetch comments for many records in one query, grouped in append order."""

    ids = [int(i) for i in attendance_ids]
    grouped: dict[int, list[Comment]] = defaultdict(list)
    if not ids:
        return grouped

    placeholders = ",".join(["%s"] * len(ids))
    cur.execute(
        f"SELECT {_COLUMNS} FROM attendance_comments "
        f"WHERE attendance_id IN ({placeholders}) ORDER BY comment_id",
        tuple(ids),
    )
    for row in fetchall(cur):
        grouped[int(row["attendance_id"])].append(row_to_comment(row))
    return grouped


class MySQLCommentRepository(CommentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        attendance_id: int,
        admin_id: str,
        admin_name: str,
        text: str,
        created_at: datetime,
    ) -> Optional[Comment]:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_comments(attendance_id, admin_id, admin_name, text, created_at)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(attendance_id), admin_id, admin_name, text, created_at),
                )
            except mysql.connector.IntegrityError as e:
                if e.errno == errorcode.ER_NO_REFERENCED_ROW_2:
                    return None
                raise
            return Comment(
                comment_id=int(cur.lastrowid),
                admin_id=admin_id,
                admin_name=admin_name,
                text=text,
                created_at=created_at,
            )

    def list_for_attendance(self, attendance_id: int) -> Sequence[Comment]:
        with db_cursor(self._conn_factory) as (_, cur):
            return load_comments(cur, [attendance_id]).get(int(attendance_id), [])
