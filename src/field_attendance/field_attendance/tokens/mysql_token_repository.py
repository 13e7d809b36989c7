from __future__ import annotations

from datetime import date
from typing import Optional

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, is_duplicate_key
from .model import DailyToken
from .repository import DailyTokenRepository


class MySQLDailyTokenRepository(DailyTokenRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_date(self, token_date: date) -> Optional[DailyToken]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT token_date, code FROM daily_tokens WHERE token_date=%s", (token_date,))
            row = fetchone(cur)
            if not row:
                return None
            return DailyToken(token_date=row["token_date"], code=str(row["code"]))

    def create_if_absent(self, token: DailyToken) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    "INSERT INTO daily_tokens(token_date, code) VALUES(%s,%s)",
                    (token.token_date, token.code),
                )
            except mysql.connector.IntegrityError as e:
                if is_duplicate_key(e):
                    return False
                raise
            return True
