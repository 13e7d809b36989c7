from __future__ import annotations

import math
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} wajib diisi")
    return value.strip()


def is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def as_finite_float(value: Any) -> float | None:
    """Return value as a finite float, or None when it is not one.

    Booleans are rejected even though Python treats them as ints.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
