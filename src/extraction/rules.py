"""
Rule tables for turning Korean free text into task fields.

The tables are rendered into the extraction prompt and also back the local
matchers below, which the mock provider uses to answer offline.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Optional

from todo_ai.clock import WEEKDAYS_KO, to_kst
from todo_ai.models import DEFAULT_CATEGORY

MAX_CATEGORIES = 2

# (phrase, rule shown to the model)
DATE_RULES: tuple[tuple[str, str], ...] = (
    ("오늘", "{today}"),
    ("내일", "현재 날짜 + 1일"),
    ("모레", "현재 날짜 + 2일"),
    ("이번 주 금요일", "가장 가까운 금요일"),
    ("다음 주까지", "다음 주 일요일 (다음 주의 마지막 날)"),
    ("다음 주 월요일", "다음 주의 월요일"),
    ("월요일, 화요일 등 요일만 언급", "다음 해당 요일"),
)

TIME_OF_DAY: tuple[tuple[str, int], ...] = (
    ("아침", 9),
    ("점심", 12),
    ("오후", 14),
    ("저녁", 18),
    ("밤", 21),
)

END_OF_TODAY_PHRASES = ("오늘 중", "오늘 안에", "오늘까지", "오늘 까지")

DEFAULT_DAYS_BY_PRIORITY = {"high": 1, "medium": 3, "low": 7}

PRIORITY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("high", ("급하게", "중요한", "빨리", "꼭", "반드시", "긴급", "시급")),
    ("low", ("여유롭게", "천천히", "언젠가", "나중에")),
)

MEDIUM_HINTS = ("보통", "적당히")

# Order matters: matches are emitted in table order, capped at MAX_CATEGORIES.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("업무", ("회의", "보고서", "프로젝트", "업무", "미팅", "발표", "제안서", "문서")),
    ("개인", ("쇼핑", "친구", "가족", "개인", "약속", "모임")),
    ("건강", ("운동", "병원", "건강", "요가", "헬스", "조깅", "산책")),
    ("학습", ("공부", "책", "강의", "학습", "인강", "세미나", "강좌", "과제", "기획", "수업", "교육")),
)

_EXPLICIT_HOUR = re.compile(r"(오전|오후)\s*(\d{1,2})\s*시(?:\s*(\d{1,2})\s*분|\s*반)?")
_WEEKDAY = re.compile(r"(이번\s*주|다음\s*주)?\s*([월화수목금토일])요일")


def match_priority(text: str) -> str:
    for priority, keywords in PRIORITY_KEYWORDS:
        if any(k in text for k in keywords):
            return priority
    return "medium"


def match_categories(text: str) -> list[str]:
    found = [category for category, keywords in CATEGORY_KEYWORDS if any(k in text for k in keywords)]
    return found[:MAX_CATEGORIES] or [DEFAULT_CATEGORY]


def _weekday_index(char: str) -> int:
    return [w[0] for w in WEEKDAYS_KO].index(char)


def resolve_date(text: str, now: datetime) -> Optional[datetime]:
    """Concrete date (midnight KST) for the first date cue in text, or None."""
    today = to_kst(now).replace(hour=0, minute=0, second=0, microsecond=0)
    compact = re.sub(r"\s+", "", text)
    this_monday = today - timedelta(days=today.weekday())

    if "다음주까지" in compact:
        return this_monday + timedelta(days=13)

    m = _WEEKDAY.search(text)
    if m:
        target = _weekday_index(m.group(2))
        scope = re.sub(r"\s+", "", m.group(1) or "")
        if scope == "다음주":
            return this_monday + timedelta(days=7 + target)
        if scope == "이번주":
            return today + timedelta(days=(target - today.weekday()) % 7)
        return today + timedelta(days=(target - today.weekday()) % 7 or 7)

    if "모레" in text:
        return today + timedelta(days=2)
    if "내일" in text:
        return today + timedelta(days=1)
    if "오늘" in text:
        return today
    return None


def resolve_time(text: str) -> tuple[int, int]:
    m = _EXPLICIT_HOUR.search(text)
    if m:
        hour = int(m.group(2)) % 12
        if m.group(1) == "오후":
            hour += 12
        minute = int(m.group(3)) if m.group(3) else (30 if m.group(0).endswith("반") else 0)
        return hour, min(minute, 59)

    for word, hour in TIME_OF_DAY:
        if word in text:
            return hour, 0

    if any(p in text for p in END_OF_TODAY_PHRASES):
        return 23, 59
    return 9, 0


def resolve_due_date(text: str, now: datetime) -> Optional[datetime]:
    """Apply the date and time tables locally. None when text has no date cue."""
    day = resolve_date(text, now)
    if day is None:
        return None
    hour, minute = resolve_time(text)
    return day.replace(hour=hour, minute=minute)
