from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import DailyToken


class DailyTokenRepository(Protocol):
    def get_for_date(self, token_date: date) -> Optional[DailyToken]:
        raise NotImplementedError

    def create_if_absent(self, token: DailyToken) -> bool:
        """Insert the token; return False if another writer already owns the date."""

        raise NotImplementedError
