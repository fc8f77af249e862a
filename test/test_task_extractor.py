import asyncio
import json

import pytest

from extraction.task_extractor import TaskExtractor
from llm.schemas import TODO_SCHEMA
from todo_ai.errors import (
    ConfigurationError,
    InvalidInput,
    ModelFailure,
    RateLimited,
    UnknownFailure,
)


def _run(coro):
    return asyncio.run(coro)


@pytest.mark.parametrize("raw", ["", " ", "a", "가" * 501, None])
def test_invalid_input_never_reaches_model(fake_provider_factory, llm_factory_for, fixed_now, raw):
    provider = fake_provider_factory('{"title": "x"}')
    extractor = TaskExtractor(llm_factory=llm_factory_for(provider))
    with pytest.raises(InvalidInput):
        _run(extractor.extract(raw, now=fixed_now))
    assert len(provider.calls) == 0


def test_invalid_input_checked_before_credentials(fixed_now):
    def factory():
        raise AssertionError("factory must not be called for invalid input")

    extractor = TaskExtractor(llm_factory=factory)
    with pytest.raises(InvalidInput) as exc:
        _run(extractor.extract("", now=fixed_now))
    assert exc.value.message == "할 일 내용을 입력해줘"


def test_extract_happy_path(fake_provider_factory, llm_factory_for, fixed_now):
    provider = fake_provider_factory(json.dumps({
        "title": "팀 회의",
        "description": "분기 실적 공유",
        "due_date": "2026-10-15T09:00:00+09:00",
        "priority": "high",
        "category": ["업무"],
    }))
    extractor = TaskExtractor(llm_factory=llm_factory_for(provider))

    todo = _run(extractor.extract("  내일 아침   급하게 팀 회의  ", now=fixed_now))

    assert todo.title == "팀 회의"
    assert todo.due_date == "2026-10-15T09:00:00+09:00"
    assert todo.priority == "high"
    assert todo.category == ["업무"]

    call = provider.calls[0]
    assert call["schema"] is TODO_SCHEMA
    assert '"내일 아침 급하게 팀 회의"' in call["prompt"]


def test_model_output_is_post_processed(fake_provider_factory, llm_factory_for, fixed_now):
    provider = fake_provider_factory(
        'Sure! {"title": "", "due_date": "2026-10-13T09:00:00+09:00", "priority": "??", "category": []}'
    )
    extractor = TaskExtractor(llm_factory=llm_factory_for(provider))
    todo = _run(extractor.extract("뭔가 하기", now=fixed_now))
    assert todo.title == "새 할 일"
    assert todo.due_date == "2026-10-15T09:00:00+09:00"
    assert todo.priority == "medium"
    assert todo.category == ["기타"]


def test_rate_limit_failure_classified(fake_provider_factory, llm_factory_for, fixed_now):
    provider = fake_provider_factory(error=RuntimeError("Upstream said: rate limit exceeded"))
    extractor = TaskExtractor(llm_factory=llm_factory_for(provider))
    with pytest.raises(RateLimited) as exc:
        _run(extractor.extract("내일 회의", now=fixed_now))
    assert exc.value.status_code == 429
    assert exc.value.retryable


def test_generic_failure_carries_message(fake_provider_factory, llm_factory_for, fixed_now):
    provider = fake_provider_factory(error=RuntimeError("model overloaded"))
    extractor = TaskExtractor(llm_factory=llm_factory_for(provider))
    with pytest.raises(ModelFailure) as exc:
        _run(extractor.extract("내일 회의", now=fixed_now))
    assert "(model overloaded)" in exc.value.message


def test_garbage_output_is_model_failure(fake_provider_factory, llm_factory_for, fixed_now):
    provider = fake_provider_factory("THIS IS NOT JSON AT ALL")
    extractor = TaskExtractor(llm_factory=llm_factory_for(provider))
    with pytest.raises(ModelFailure):
        _run(extractor.extract("내일 회의", now=fixed_now))


def test_missing_credentials_surface_as_configuration_error(fixed_now):
    def factory():
        raise ConfigurationError("API 키가 설정되지 않았어. 관리자에게 문의해줘.")

    extractor = TaskExtractor(llm_factory=factory)
    with pytest.raises(ConfigurationError):
        _run(extractor.extract("내일 회의", now=fixed_now))


def test_timeout_is_unknown_failure(llm_factory_for, fixed_now):
    from llm.llm_client import LLMClient

    class SlowProvider:
        async def generate(self, *, prompt: str, schema: dict) -> str:
            await asyncio.sleep(1)
            return "{}"

    extractor = TaskExtractor(llm_factory=lambda: LLMClient(SlowProvider(), timeout_s=0.01))
    with pytest.raises(UnknownFailure):
        _run(extractor.extract("내일 회의", now=fixed_now))
