import logging
import time
from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends

from analysis.todo_analyzer import TodoAnalyzer
from api.dependencies import get_clock, get_task_extractor, get_todo_analyzer
from api.metrics import AI_FAILURES_TOTAL, ANALYSES_TOTAL, TODOS_GENERATED_TOTAL, observe_request
from extraction.task_extractor import TaskExtractor
from todo_ai.errors import ErrorKind, TodoAIError
from todo_ai.models import AnalyzeTodosIn, GenerateTodoIn

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


def _record_failure(endpoint: str, error: TodoAIError, start: float) -> None:
    observe_request(endpoint, error.kind.value, start, time.time())
    if error.kind is not ErrorKind.INVALID_INPUT:
        try:
            AI_FAILURES_TOTAL.labels(kind=error.kind.value).inc()
        except Exception:
            pass


@router.post("/generate-todo")
async def generate_todo(
    payload: GenerateTodoIn,
    extractor: TaskExtractor = Depends(get_task_extractor),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> dict:
    """Turn free text into one structured todo."""
    start = time.time()
    try:
        todo = await extractor.extract(payload.input, now=clock())
    except TodoAIError as e:
        logger.warning(f"generate-todo failed ({e.kind.value}): {e.message}")
        _record_failure("/api/generate-todo", e, start)
        raise

    observe_request("/api/generate-todo", "ok", start, time.time())
    TODOS_GENERATED_TOTAL.inc()
    return todo.model_dump()


@router.post("/analyze-todos")
async def analyze_todos(
    payload: AnalyzeTodosIn,
    analyzer: TodoAnalyzer = Depends(get_todo_analyzer),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> dict:
    """Summary, urgent tasks, insights and recommendations for a set of todos."""
    start = time.time()
    try:
        result = await analyzer.analyze(payload.todos, payload.period, now=clock())
    except TodoAIError as e:
        logger.warning(f"analyze-todos failed ({e.kind.value}): {e.message}")
        _record_failure("/api/analyze-todos", e, start)
        raise

    observe_request("/api/analyze-todos", "ok", start, time.time())
    ANALYSES_TOTAL.labels(period=payload.period).inc()
    return result.model_dump()
