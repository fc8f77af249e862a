from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from extraction.input_rules import normalize_input
from extraction.rules import DEFAULT_DAYS_BY_PRIORITY
from todo_ai.clock import at_nine, format_kst, parse_timestamp, to_kst
from todo_ai.models import (
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    PLACEHOLDER_TITLE,
    PRIORITIES,
    TodoDraft,
)

logger = logging.getLogger(__name__)

MAX_TITLE_CHARS = 50
TRUNCATED_TITLE_CHARS = 47
MIN_TITLE_CHARS = 2
ELLIPSIS = "..."


def clamp_title(raw: Any) -> str:
    title = normalize_input(raw) if isinstance(raw, str) else ""
    if len(title) > MAX_TITLE_CHARS:
        title = title[:TRUNCATED_TITLE_CHARS] + ELLIPSIS
    if len(title) < MIN_TITLE_CHARS:
        return PLACEHOLDER_TITLE
    return title


def clean_priority(raw: Any) -> str:
    if isinstance(raw, str) and raw.strip().lower() in PRIORITIES:
        return raw.strip().lower()
    return DEFAULT_PRIORITY


def clean_categories(raw: Any) -> list[str]:
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, (list, tuple)):
        return [DEFAULT_CATEGORY]

    out: list[str] = []
    for item in raw:
        if isinstance(item, str) and item.strip() and item.strip() not in out:
            out.append(item.strip())
    return out or [DEFAULT_CATEGORY]


def postprocess_todo(raw: Any, now: datetime) -> TodoDraft:
    """Repair model output into a valid task. Never raises; only substitutes defaults.

    Rules, applied in order:
      1. a due date strictly before `now` becomes tomorrow 09:00 KST
      2. title is clamped to 50 chars (47 + "..."), blank becomes a placeholder
      3. unknown priority becomes "medium"
      4. empty category becomes ["기타"]
      5. a missing due date is derived from priority: +1 / +3 / +7 days at 09:00
    """
    data = raw if isinstance(raw, dict) else {}
    now = to_kst(now)

    due = parse_timestamp(data.get("due_date"))
    if due is not None and due < now:
        logger.info(f"Past due date from model ({data.get('due_date')}), moving to tomorrow 09:00")
        due = at_nine(now, 1)

    title = clamp_title(data.get("title"))
    priority = clean_priority(data.get("priority"))
    category = clean_categories(data.get("category"))

    if due is None:
        due = at_nine(now, DEFAULT_DAYS_BY_PRIORITY[priority])

    description = data.get("description")
    if not isinstance(description, str) or not description.strip():
        description = None

    return TodoDraft(
        title=title,
        description=description,
        due_date=format_kst(due),
        priority=priority,
        category=category,
    )
