from __future__ import annotations

import logging
import secrets
from datetime import date
from typing import Optional

from ..common.datetime_utils import today_local
from ..core.constants import DAILY_CODE_MAX, DAILY_CODE_MIN
from ..core.exceptions import InvalidDailyCode, StoreFailure
from .model import CheckinPass, DailyToken
from .repository import DailyTokenRepository

logger = logging.getLogger(__name__)


def generate_code() -> str:
    return str(DAILY_CODE_MIN + secrets.randbelow(DAILY_CODE_MAX - DAILY_CODE_MIN + 1))


class DailyTokenService:
    """Issues and checks the single check-in code of each calendar day.

    The code is created lazily by the first request of the day and then stays
    fixed: there is no expiry within the day and no per-user single use.
    """

    def __init__(self, tokens: DailyTokenRepository):
        self._tokens = tokens

    def get_or_create_today_code(self, today: Optional[date] = None) -> str:
        today = today or today_local()

        existing = self._tokens.get_for_date(today)
        if existing:
            return existing.code

        token = DailyToken(token_date=today, code=generate_code())
        if self._tokens.create_if_absent(token):
            logger.info("daily_code_created", extra={"token_date": today.isoformat()})
            return token.code

        # Lost the race against a concurrent first request: use the stored code.
        winner = self._tokens.get_for_date(today)
        if not winner:
            raise StoreFailure(f"Token untuk {today.isoformat()} tidak dapat dibaca ulang")
        return winner.code

    def validate(self, candidate: str, today: Optional[date] = None) -> bool:
        if candidate is None:
            return False
        return str(candidate).strip() == self.get_or_create_today_code(today)

    def unlock(self, user_id: str, candidate: str, today: Optional[date] = None) -> CheckinPass:
        today = today or today_local()
        if not self.validate(candidate, today):
            logger.info("daily_code_rejected", extra={"user_id": user_id})
            raise InvalidDailyCode("Token salah! Minta token hari ini ke Admin.")
        return CheckinPass(user_id=user_id, work_date=today)
