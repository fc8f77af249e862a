from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    CONFIGURATION = "configuration_error"
    RATE_LIMITED = "rate_limited"
    MODEL_FAILURE = "model_failure"
    UNKNOWN = "unknown_failure"


class TodoAIError(Exception):
    """Base of the closed error family surfaced to API callers."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    status_code: int = 500
    retryable: bool = False
    retry_after_s: Optional[int] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"error": self.message}


class InvalidInput(TodoAIError):
    kind = ErrorKind.INVALID_INPUT
    status_code = 400


class ConfigurationError(TodoAIError):
    kind = ErrorKind.CONFIGURATION
    status_code = 500


class RateLimited(TodoAIError):
    kind = ErrorKind.RATE_LIMITED
    status_code = 429
    retryable = True
    retry_after_s = 30


class ModelFailure(TodoAIError):
    kind = ErrorKind.MODEL_FAILURE
    status_code = 500


class UnknownFailure(TodoAIError):
    kind = ErrorKind.UNKNOWN
    status_code = 500


MISSING_API_KEY_MESSAGE = "API 키가 설정되지 않았어. 관리자에게 문의해줘."
RATE_LIMITED_MESSAGE = "API 호출 한도를 초과했어. 잠시 후 다시 시도해줘."
