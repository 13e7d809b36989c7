from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import Role
from ..core.exceptions import DuplicateIdentifier
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import User
from .repository import UserRepository


def _row_to_user(row: dict) -> User:
    return User(
        user_id=str(row["user_id"]),
        name=row["name"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, name, password_hash, role FROM users WHERE user_id=%s",
                (user_id,),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(self, user: User) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    "INSERT INTO users(user_id, name, password_hash, role) VALUES(%s,%s,%s,%s)",
                    (user.user_id, user.name, user.password_hash, user.role.value),
                )
            except mysql.connector.IntegrityError as e:
                if is_duplicate_key(e):
                    raise DuplicateIdentifier(f"NIP {user.user_id} sudah terdaftar") from e
                raise

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET password_hash=%s WHERE user_id=%s",
                (password_hash, user_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, name, password_hash, role FROM users ORDER BY user_id")
            return [_row_to_user(r) for r in fetchall(cur)]
