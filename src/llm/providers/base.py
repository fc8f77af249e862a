from __future__ import annotations
from abc import ABC, abstractmethod

class LLMProvider(ABC):
    name: str = "base"

    @abstractmethod
    async def generate(self, *, prompt: str, schema: dict) -> str:
        """
        Must return the model output as TEXT constrained to `schema`
        (we'll parse JSON in LLMClient).
        """
        raise NotImplementedError
