"""
Time helpers pinned to Korea Standard Time.

Every comparison in the app happens in KST (UTC+9). Naive timestamps are
read as KST; timestamps carrying another offset are converted first.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

KST = timezone(timedelta(hours=9), name="KST")

WEEKDAYS_KO = ("월요일", "화요일", "수요일", "목요일", "금요일", "토요일", "일요일")


def now_kst() -> datetime:
    return datetime.now(KST)


def to_kst(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=KST)
    return dt.astimezone(KST)


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO-8601-ish string into an aware KST datetime, or None."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    # shifting to +09:00 can leave the datetime range near year 1 or 9999
    try:
        return to_kst(parsed)
    except OverflowError:
        return None


def format_kst(dt: datetime) -> str:
    """Render as YYYY-MM-DDTHH:mm:ss+09:00."""
    return to_kst(dt).strftime("%Y-%m-%dT%H:%M:%S") + "+09:00"


def at_nine(dt: datetime, days_ahead: int) -> datetime:
    """09:00 KST on the date `days_ahead` days after dt's KST date."""
    base = to_kst(dt) + timedelta(days=days_ahead)
    return base.replace(hour=9, minute=0, second=0, microsecond=0)


def weekday_ko(dt: datetime) -> str:
    return WEEKDAYS_KO[to_kst(dt).weekday()]
