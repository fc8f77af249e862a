import asyncio
import json
import logging
import os
import re
from typing import Any, Optional

from llm.providers.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = float(os.getenv("LLM_TIMEOUT_S", "30"))

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class ModelOutputError(ValueError):
    """The provider answered, but not with a JSON object."""


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse model text into a dict, tolerating chatter around the JSON."""
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError):
        match = _JSON_OBJECT.search(text or "")
        if match is None:
            raise ModelOutputError("model returned no JSON object")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ModelOutputError(f"model returned invalid JSON: {e.msg}") from e

    if not isinstance(data, dict):
        raise ModelOutputError(f"model returned {type(data).__name__}, expected object")
    return data


class LLMClient:
    """Schema-constrained generation with a bounded wait.

    One call per request; failures are raised as-is for the caller to
    classify. Timeouts surface as asyncio.TimeoutError.
    """

    def __init__(self, provider: LLMProvider, timeout_s: Optional[float] = None):
        self.provider = provider
        self.timeout_s = timeout_s if timeout_s is not None else DEFAULT_TIMEOUT_S

    async def generate(self, prompt: str, schema: dict) -> dict[str, Any]:
        text = await asyncio.wait_for(
            self.provider.generate(prompt=prompt, schema=schema),
            timeout=self.timeout_s,
        )
        logger.debug(f"Raw model output: {text}")
        return parse_json_object(text)
