from __future__ import annotations

import asyncio
import logging

import httpx

from todo_ai.errors import (
    RATE_LIMITED_MESSAGE,
    ModelFailure,
    RateLimited,
    TodoAIError,
    UnknownFailure,
)

logger = logging.getLogger(__name__)

RATE_LIMIT_MARKERS = ("quota", "rate limit", "ratelimit", "429", "resource_exhausted", "too many requests")

# (failure label, unknown-failure label) per operation
OPERATION_LABELS = {
    "generate": ("AI 처리", "AI 생성"),
    "analyze": ("AI 분석", "AI 분석"),
}


def _is_rate_limited(exc: BaseException, message: str) -> bool:
    if isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code == 429:
        return True
    lowered = message.lower()
    return any(marker in lowered for marker in RATE_LIMIT_MARKERS)


def classify_failure(exc: BaseException, operation: str = "generate") -> TodoAIError:
    """Map a model-call failure onto the outward error taxonomy.

    Provider errors only come with free-text messages, so rate limiting is
    recognised by message content. Errors that are already classified pass
    through unchanged.
    """
    if isinstance(exc, TodoAIError):
        return exc

    failure_label, unknown_label = OPERATION_LABELS.get(operation, OPERATION_LABELS["generate"])
    unknown_message = f"{unknown_label} 중 알 수 없는 오류가 발생했어. 잠시 후 다시 시도해줘."

    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        logger.warning(f"Model call timed out during {operation}")
        return UnknownFailure(unknown_message)

    message = str(exc).strip()

    if _is_rate_limited(exc, message):
        logger.warning(f"Model quota exhausted during {operation}: {message}")
        return RateLimited(RATE_LIMITED_MESSAGE)

    if message:
        logger.error(f"Model call failed during {operation}: {message}")
        return ModelFailure(f"{failure_label} 중 오류가 발생했어. 잠시 후 다시 시도해줘. ({message})")

    logger.error(f"Model call failed during {operation} without a message: {exc!r}")
    return UnknownFailure(unknown_message)
