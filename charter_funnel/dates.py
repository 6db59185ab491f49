# dates.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

import dateparser

_SETTINGS = {"PREFER_DATES_FROM": "future", "DATE_ORDER": "MDY"}


def _parse(text: str) -> Optional[datetime]:
    if not text or not text.strip():
        return None
    return dateparser.parse(text.strip(), languages=["en"], settings=_SETTINGS)


def normalize_date(text: str) -> Optional[str]:
    """ISO date (YYYY-MM-DD) for free-form input, or None."""
    dt = _parse(text)
    return dt.date().isoformat() if dt else None


def departure_timestamp(date: str, time: str) -> str:
    """Combine date and time input into "YYYY-MM-DDTHH:MM".

    Falls back to the raw "<date>T<time>" text when the input cannot be
    parsed, so a quote always carries something displayable.
    """
    dt = _parse(f"{date} {time}".strip())
    if dt is None:
        return f"{date}T{time}"
    if not time.strip():
        return dt.date().isoformat()
    return dt.replace(second=0, microsecond=0).isoformat(timespec="minutes")
