from datetime import datetime

import pytest

from llm.llm_client import LLMClient
from todo_ai.clock import KST

# Wednesday afternoon
FIXED_NOW = datetime(2026, 10, 14, 15, 30, tzinfo=KST)


class FakeProvider:
    def __init__(self, response_text: str = "{}", error: Exception = None):
        self._response_text = response_text
        self._error = error
        self.calls = []

    async def generate(self, *, prompt: str, schema: dict) -> str:
        self.calls.append({"prompt": prompt, "schema": schema})
        if self._error is not None:
            raise self._error
        return self._response_text


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str = "{}", error: Exception = None):
        return FakeProvider(response_text, error=error)
    return _make


@pytest.fixture
def llm_factory_for():
    """Wrap a provider into the zero-arg factory services expect."""
    def _make(provider):
        return lambda: LLMClient(provider=provider, timeout_s=5)
    return _make
