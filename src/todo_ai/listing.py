from __future__ import annotations

from typing import Iterable, List, Literal, Optional

from todo_ai.models import Todo

StatusFilter = Literal["all", "active", "completed"]
PriorityFilter = Literal["all", "high", "medium", "low"]
SortKey = Literal["created", "priority", "dueDate"]

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}


def filter_todos(
    todos: Iterable[Todo],
    q: Optional[str] = None,
    status: StatusFilter = "all",
    priority: PriorityFilter = "all",
) -> List[Todo]:
    needle = (q or "").strip().lower()
    out = []
    for t in todos:
        if needle and needle not in t.title.lower() and needle not in (t.description or "").lower():
            continue
        if status == "completed" and not t.completed:
            continue
        if status == "active" and t.completed:
            continue
        if priority != "all" and t.priority != priority:
            continue
        out.append(t)
    return out


def sort_todos(todos: Iterable[Todo], sort: SortKey = "created") -> List[Todo]:
    """Stable sort. "created" keeps the store's newest-first order."""
    todos = list(todos)
    if sort == "priority":
        return sorted(todos, key=lambda t: PRIORITY_ORDER[t.priority], reverse=True)
    if sort == "dueDate":
        dated = sorted((t for t in todos if t.due_date), key=lambda t: t.due_date)
        return dated + [t for t in todos if not t.due_date]
    return todos
