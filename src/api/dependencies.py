import os
from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException

from analysis.todo_analyzer import TodoAnalyzer
from api import state
from extraction.task_extractor import TaskExtractor
from llm.llm_client import DEFAULT_TIMEOUT_S, LLMClient
from llm.providers.base import LLMProvider
from llm.providers.gemini_provider import GeminiProvider
from llm.providers.mock_provider import MockProvider
from storage.todo_store import InMemoryTodoStore, TodoStore
from todo_ai.clock import now_kst

# Configuration
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "gemini").strip().lower()
LLM_TIMEOUT_S = DEFAULT_TIMEOUT_S


def build_provider() -> LLMProvider:
    """Raises ConfigurationError when the Gemini key is missing."""
    if LLM_PROVIDER == "mock":
        return MockProvider()
    return GeminiProvider()


def build_llm_client() -> LLMClient:
    return LLMClient(provider=build_provider(), timeout_s=LLM_TIMEOUT_S)


def get_llm_factory() -> Callable[[], LLMClient]:
    return build_llm_client


def get_clock() -> Callable[[], datetime]:
    return now_kst


def get_task_extractor(
    llm_factory: Callable[[], LLMClient] = Depends(get_llm_factory),
) -> TaskExtractor:
    return TaskExtractor(llm_factory=llm_factory)


def get_todo_analyzer(
    llm_factory: Callable[[], LLMClient] = Depends(get_llm_factory),
) -> TodoAnalyzer:
    return TodoAnalyzer(llm_factory=llm_factory)


def get_todo_store() -> TodoStore:
    if state.todo_store is None:
        state.todo_store = InMemoryTodoStore()
    return state.todo_store


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """The session layer in front of us resolves the user and forwards the id."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="로그인이 필요해")
    return x_user_id.strip()
