from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Sequence

from todo_ai.clock import parse_timestamp, to_kst
from todo_ai.models import TodoSnapshot


@dataclass(frozen=True)
class TodoStats:
    total: int
    completed: int
    completion_rate: float
    priority_counts: Dict[str, int] = field(default_factory=dict)
    category_counts: Dict[str, int] = field(default_factory=dict)
    overdue: int = 0
    due_today: int = 0
    time_distribution: Dict[str, int] = field(default_factory=dict)

    @property
    def remaining(self) -> int:
        return self.total - self.completed

    @property
    def completion_rate_str(self) -> str:
        return f"{self.completion_rate:.1f}"


def time_bucket(hour: int) -> str:
    if 6 <= hour < 12:
        return "morning"
    if 12 <= hour < 18:
        return "afternoon"
    return "evening"


def compute_stats(todos: Sequence[TodoSnapshot], now: datetime) -> TodoStats:
    """Descriptive numbers the analysis narrative is built on. All in KST."""
    now = to_kst(now)
    total = len(todos)
    completed = sum(1 for t in todos if t.completed)
    rate = round(completed * 100 / total, 1) if total else 0.0

    priority_counts = {"high": 0, "medium": 0, "low": 0}
    categories: Counter = Counter()
    time_distribution = {"morning": 0, "afternoon": 0, "evening": 0}
    overdue = 0
    due_today = 0

    for t in todos:
        if t.priority in priority_counts:
            priority_counts[t.priority] += 1
        for cat in t.category or []:
            categories[cat] += 1

        due = parse_timestamp(t.due_date)
        if due is None:
            continue
        if due < now and not t.completed:
            overdue += 1
        if due.date() == now.date():
            due_today += 1
        time_distribution[time_bucket(due.hour)] += 1

    return TodoStats(
        total=total,
        completed=completed,
        completion_rate=rate,
        priority_counts=priority_counts,
        category_counts=dict(categories),
        overdue=overdue,
        due_today=due_today,
        time_distribution=time_distribution,
    )
