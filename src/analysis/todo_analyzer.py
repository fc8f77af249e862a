import logging
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from pydantic import ValidationError

from analysis.prompt_builder import build_analysis_prompt
from analysis.statistics import TodoStats, compute_stats
from llm.error_classifier import classify_failure
from llm.llm_client import LLMClient
from llm.schemas import ANALYSIS_SCHEMA
from todo_ai.clock import now_kst
from todo_ai.errors import InvalidInput, TodoAIError
from todo_ai.models import PERIODS, AnalysisResult, TodoSnapshot

logger = logging.getLogger(__name__)

MAX_LIST_ITEMS = 5

EMPTY_SUMMARIES = {
    "today": "오늘 등록된 할 일이 없어. 새로운 할 일을 추가해보는 건 어때?",
    "week": "이번 주 등록된 할 일이 없어. 계획을 세워보는 건 어때?",
}


def validate_analysis_request(todos: Any, period: Any) -> tuple[list[TodoSnapshot], str]:
    if not isinstance(todos, list):
        raise InvalidInput("할 일 목록 데이터가 필요해")
    if period not in PERIODS:
        raise InvalidInput("분석 기간을 선택해줘 (today 또는 week)")

    snapshots = []
    for item in todos:
        if isinstance(item, TodoSnapshot):
            snapshots.append(item)
            continue
        if not isinstance(item, dict):
            raise InvalidInput("할 일 목록 데이터가 필요해")
        try:
            snapshots.append(TodoSnapshot.model_validate(item))
        except ValidationError as e:
            raise InvalidInput("할 일 목록 데이터 형식이 올바르지 않아") from e
    return snapshots, period


def empty_analysis(period: str) -> AnalysisResult:
    return AnalysisResult(
        summary=EMPTY_SUMMARIES[period],
        urgentTasks=[],
        insights=["할 일을 추가하면 AI가 분석해줄게"],
        recommendations=["새로운 할 일을 추가해봐"],
    )


def fallback_summary(stats: TodoStats) -> str:
    cheer = "정말 잘하고 있어! 👏" if stats.completion_rate >= 70 else "조금만 더 힘내봐! 💪"
    return f"총 {stats.total}개 중 {stats.completed}개 완료! ({stats.completion_rate_str}%) {cheer}"


def _strings(raw: Any, limit: int = MAX_LIST_ITEMS) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [s.strip() for s in raw if isinstance(s, str) and s.strip()][:limit]


def shape_analysis(raw: dict, stats: TodoStats) -> AnalysisResult:
    summary = raw.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = fallback_summary(stats)
    return AnalysisResult(
        summary=summary.strip(),
        urgentTasks=_strings(raw.get("urgentTasks")),
        insights=_strings(raw.get("insights")),
        recommendations=_strings(raw.get("recommendations")),
    )


class TodoAnalyzer:
    """Statistics computed here, narrative written by the model."""

    def __init__(self, llm_factory: Callable[[], LLMClient]):
        self.llm_factory = llm_factory

    async def analyze(
        self,
        todos: Sequence[Any],
        period: Any,
        now: Optional[datetime] = None,
    ) -> AnalysisResult:
        snapshots, period = validate_analysis_request(todos, period)

        if not snapshots:
            logger.info(f"No todos for period={period}, returning canned analysis")
            return empty_analysis(period)

        now = now or now_kst()
        stats = compute_stats(snapshots, now)
        logger.info(
            f"Analyzing {stats.total} todos (period={period}, completion={stats.completion_rate_str}%)"
        )

        llm = self.llm_factory()
        prompt = build_analysis_prompt(snapshots, period, stats)

        try:
            raw = await llm.generate(prompt, ANALYSIS_SCHEMA)
        except TodoAIError:
            raise
        except Exception as e:
            raise classify_failure(e, operation="analyze") from e

        return shape_analysis(raw, stats)
