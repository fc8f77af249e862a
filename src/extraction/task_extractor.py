import logging
from datetime import datetime
from typing import Any, Callable, Optional

from extraction.input_rules import normalize_input, validate_input
from extraction.postprocessor import postprocess_todo
from extraction.prompt_builder import build_todo_prompt
from llm.error_classifier import classify_failure
from llm.llm_client import LLMClient
from llm.schemas import TODO_SCHEMA
from todo_ai.clock import now_kst
from todo_ai.errors import TodoAIError
from todo_ai.models import TodoDraft

logger = logging.getLogger(__name__)


class TaskExtractor:
    """Natural language in, one valid TodoDraft out.

    The LLM client is built lazily through `llm_factory` so that a missing
    credential only matters once the input has passed validation.
    """

    def __init__(self, llm_factory: Callable[[], LLMClient]):
        self.llm_factory = llm_factory

    async def extract(self, raw_input: Any, now: Optional[datetime] = None) -> TodoDraft:
        validate_input(raw_input)
        text = normalize_input(raw_input)
        logger.info(f"Normalized input: {text[:50]}")

        now = now or now_kst()
        llm = self.llm_factory()
        prompt = build_todo_prompt(text, now)

        try:
            raw = await llm.generate(prompt, TODO_SCHEMA)
        except TodoAIError:
            raise
        except Exception as e:
            raise classify_failure(e, operation="generate") from e

        todo = postprocess_todo(raw, now)
        logger.info(f"Generated todo: {todo.model_dump_json()}")
        return todo
