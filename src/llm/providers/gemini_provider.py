from __future__ import annotations
import os
import httpx
from todo_ai.errors import ConfigurationError, MISSING_API_KEY_MESSAGE
from .base import LLMProvider

class GeminiProvider(LLMProvider):
    name = "gemini"

    def __init__(self, api_key: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = (api_key if api_key is not None else os.getenv("GOOGLE_API_KEY", "")).strip()
        self.model = os.getenv("GEMINI_MODEL", "gemini-2.0-flash").strip()
        self.base_url = os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        ).strip()
        self.transport = transport

        if not self.api_key:
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)

    async def generate(self, *, prompt: str, schema: dict, model: str | None = None) -> str:
        url = f"{self.base_url}/models/{model or self.model}:generateContent"
        # API key in a header, not the query string
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.2,
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }

        async with httpx.AsyncClient(timeout=60.0, transport=self.transport) as client:
            r = await client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()

        candidates = data.get("candidates") or []
        if not candidates:
            feedback = data.get("promptFeedback", {})
            raise RuntimeError(f"Gemini returned no candidates: {feedback.get('blockReason', 'unknown')}")

        parts = candidates[0].get("content", {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)
