from __future__ import annotations
import json
import re
from llm.providers.base import LLMProvider
from llm.schemas import schema_fields
from extraction.rules import match_categories, match_priority, resolve_due_date
from todo_ai.clock import format_kst, parse_timestamp

_USER_INPUT = re.compile(r'\*\*사용자 입력\*\*: "(.*)"')
_NOW = re.compile(r"- 전체: (\S+)")
_COMPLETION = re.compile(r"- 완료: (\d+)개 \(([\d.]+)%\)")
_TOTAL = re.compile(r"- 전체 할 일: (\d+)개")

# trailing verb endings dropped from titles, longest first
_TITLE_SUFFIXES = ("해야 함", "해야 해", "해야지", "하기", "해야함", "할 것", "하자")


class MockProvider(LLMProvider):
    """Offline provider: answers from the local rule tables, no network."""

    name = "mock"

    async def generate(self, *, prompt: str, schema: dict) -> str:
        """
        Returns deterministic JSON based on which schema is requested.
        """
        fields = schema_fields(schema)

        if "title" in fields:
            m = _USER_INPUT.search(prompt)
            text = m.group(1) if m else ""
            now_m = _NOW.search(prompt)
            now = parse_timestamp(now_m.group(1)) if now_m else None

            title = text
            for suffix in _TITLE_SUFFIXES:
                if title.endswith(suffix):
                    title = title[: -len(suffix)].rstrip()
                    break

            due = resolve_due_date(text, now) if now is not None else None
            return json.dumps({
                "title": title,
                "description": None,
                "due_date": format_kst(due) if due else None,
                "priority": match_priority(text),
                "category": match_categories(text),
            }, ensure_ascii=False)

        if "summary" in fields:
            total_m = _TOTAL.search(prompt)
            done_m = _COMPLETION.search(prompt)
            total = total_m.group(1) if total_m else "0"
            done, rate = (done_m.group(1), done_m.group(2)) if done_m else ("0", "0.0")
            return json.dumps({
                "summary": f"총 {total}개 중 {done}개 완료! ({rate}%)",
                "urgentTasks": [],
                "insights": [
                    f"완료율은 {rate}%야",
                    "우선순위가 높은 일부터 처리하고 있어",
                    "마감일을 꼼꼼히 챙기고 있어",
                ],
                "recommendations": [
                    "지금 바로 가장 긴급한 작업부터 시작해봐",
                    "하루에 3-4개씩 나눠서 처리해봐",
                    "한 번에 하나씩, 천천히 해도 괜찮아",
                ],
            }, ensure_ascii=False)

        # Default fallback
        return "{}"
