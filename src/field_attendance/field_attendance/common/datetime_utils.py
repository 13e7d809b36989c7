from __future__ import annotations

from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def format_day(value: date) -> str:
    """Day/month/year without zero padding, e.g. 10/5/2024."""
    return f"{value.day}/{value.month}/{value.year}"


def format_clock(value: time | datetime) -> str:
    return value.strftime("%H.%M.%S")
