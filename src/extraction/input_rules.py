from __future__ import annotations

from typing import Any

from todo_ai.errors import InvalidInput

MIN_INPUT_CHARS = 2
MAX_INPUT_CHARS = 500


def validate_input(raw: Any) -> None:
    """Reject unusable free text before any model call is made."""
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidInput("할 일 내용을 입력해줘")

    if len(raw.strip()) < MIN_INPUT_CHARS:
        raise InvalidInput(f"최소 {MIN_INPUT_CHARS}자 이상 입력해줘")

    # measured on the raw string, before trimming
    if len(raw) > MAX_INPUT_CHARS:
        raise InvalidInput(f"최대 {MAX_INPUT_CHARS}자까지 입력 가능해 (현재: {len(raw)}자)")


def normalize_input(text: str) -> str:
    """Trim and collapse whitespace runs; wording, emoji and case are kept."""
    return " ".join(text.split())
