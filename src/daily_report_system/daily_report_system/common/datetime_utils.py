from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so workflows can take it as an injectable clock.
    """
    return datetime.now(timezone.utc)


def to_date_only(value: date | datetime) -> date:
    """Drop the time-of-day part; reports are keyed by calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def isoformat_or_none(value: Optional[date | datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None
