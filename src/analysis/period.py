from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from todo_ai.clock import parse_timestamp, to_kst
from todo_ai.models import TodoSnapshot


def week_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Sunday 00:00 through the following Saturday 23:59:59.999999, KST."""
    now = to_kst(now)
    days_since_sunday = (now.weekday() + 1) % 7
    start = (now - timedelta(days=days_since_sunday)).replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=7) - timedelta(microseconds=1)
    return start, end


def select_for_period(todos: Sequence[TodoSnapshot], period: str, now: datetime) -> list[TodoSnapshot]:
    """Todos whose due date falls in the period. Undated todos are left out."""
    now = to_kst(now)
    start, end = week_bounds(now)
    selected = []
    for t in todos:
        due = parse_timestamp(t.due_date)
        if due is None:
            continue
        if period == "today" and due.date() == now.date():
            selected.append(t)
        elif period == "week" and start <= due <= end:
            selected.append(t)
    return selected
