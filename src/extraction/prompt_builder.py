from __future__ import annotations

from datetime import datetime

from extraction.rules import (
    CATEGORY_KEYWORDS,
    DATE_RULES,
    DEFAULT_DAYS_BY_PRIORITY,
    MAX_CATEGORIES,
    MEDIUM_HINTS,
    PRIORITY_KEYWORDS,
    TIME_OF_DAY,
)
from todo_ai.clock import format_kst, to_kst, weekday_ko
from todo_ai.models import DEFAULT_CATEGORY

_PRIORITY_LABELS = {"high": "내일", "medium": "3일 후", "low": "7일 후"}


def _quoted(words) -> str:
    return ", ".join(f'"{w}"' for w in words)


def _date_section(current_date: str) -> str:
    lines = [f'- "{phrase}" → {rule.format(today=current_date)}' for phrase, rule in DATE_RULES]
    lines.append("- 날짜 미명시 → 우선순위에 따라 기본값 설정")
    for priority, days in DEFAULT_DAYS_BY_PRIORITY.items():
        lines.append(f"  * {priority} → {_PRIORITY_LABELS[priority]}")
    return "\n".join(lines)


def _time_section() -> str:
    lines = [f'- "{word}" → {hour:02d}:00' for word, hour in TIME_OF_DAY]
    lines += [
        '- "오전 X시" → 0X:00 (예: 오전 9시 → 09:00)',
        '- "오후 X시" → 1X:00 (예: 오후 3시 → 15:00)',
        '- **중요**: "오늘 ~까지", "오늘 중", "오늘 안에" 등 오늘 마감이면서 시간 미명시 → **23:59** (당일 자정)',
        "- 기타 시간 미명시 → **09:00 기본값**",
    ]
    return "\n".join(lines)


def _priority_section() -> str:
    keywords = dict(PRIORITY_KEYWORDS)
    return "\n".join([
        f"- **high**: {_quoted(keywords['high'])}",
        f"- **medium**: {_quoted(MEDIUM_HINTS)}, 또는 키워드 없음 (기본값)",
        f"- **low**: {_quoted(keywords['low'])}",
    ])


def _category_section() -> str:
    lines = [f"- **{category}**: {_quoted(keywords)}" for category, keywords in CATEGORY_KEYWORDS]
    lines.append(f'- **{DEFAULT_CATEGORY}**: 위 카테고리에 해당하지 않으면 "{DEFAULT_CATEGORY}" 사용')
    return "\n".join(lines)


def build_todo_prompt(text: str, now: datetime) -> str:
    """Instruction prompt for turning normalized input into one task."""
    now = to_kst(now)
    current_date = now.strftime("%Y-%m-%d")

    return f"""당신은 한국어 자연어 입력을 구조화된 할 일 데이터로 변환하는 AI 어시스턴트입니다.

**현재 날짜/시간 정보**:
- 날짜: {current_date}
- 시각: {now.strftime("%H:%M")}
- 요일: {weekday_ko(now)}
- 전체: {format_kst(now)}

**사용자 입력**: "{text}"

다음 규칙을 **정확히** 따라 할 일 데이터를 생성해주세요:

## 1. 날짜 처리 규칙 (반드시 준수)
{_date_section(current_date)}

## 2. 시간 처리 규칙 (반드시 준수)
{_time_section()}

## 3. 우선순위 키워드 (반드시 준수)
{_priority_section()}

## 4. 카테고리 분류 키워드 (반드시 준수 - 필수 항목!)
**중요**: 카테고리는 **반드시 1개 이상** 포함해야 합니다!

{_category_section()}

**분류 우선순위**:
1. 키워드가 명확히 일치하면 해당 카테고리 사용
2. "과제", "기획" 등 학습/교육 관련 → ["학습"]
3. 여러 카테고리에 해당하면 최대 {MAX_CATEGORIES}개까지 포함
4. 판단이 어려우면 → ["{DEFAULT_CATEGORY}"]

## 5. 출력 형식 (JSON - 반드시 준수)
{{
  "title": "간결한 제목 (동사형 어미 제거)",
  "description": "부가 설명 (선택)",
  "due_date": "YYYY-MM-DDTHH:mm:ss+09:00",
  "priority": "high | medium | low",
  "category": ["카테고리1", "카테고리2"]
}}

**중요 사항**:
- due_date는 가능한 한 **항상 포함**
- 날짜/시간 규칙을 **정확히** 따를 것
- 우선순위 키워드를 **엄격히** 적용
- 카테고리는 키워드 기반으로 **정확히** 분류
- JSON 형식을 **반드시** 준수

이제 사용자 입력을 변환해주세요."""
