import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from prompt_gateway.config import Settings
from prompt_gateway.providers.llm.outcome import (
    CompletionFailure,
    CompletionOutcome,
    CompletionParams,
    CompletionSuccess,
)

logger = logging.getLogger(__name__)
PAYLOAD_LOG_LIMIT = 4000


class OpenAICompletionProvider:
    """OpenAI-compatible ``/completions`` client returning typed outcomes."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.params = CompletionParams(model=settings.openai_model)
        self.completions_url = f"{settings.openai_base_url}/completions"
        self.timeout = settings.llm_timeout_seconds
        self._transport = transport

    async def complete(self, prompt: str) -> CompletionOutcome:
        request_body = self.params.request_body(prompt)
        logger.info(
            "llm.request model=%s prompt_chars=%d timeout=%.1fs",
            self.params.model,
            len(prompt),
            self.timeout,
        )
        headers = {"Authorization": f"Bearer {self.settings.openai_api_key}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                http_response = await client.post(self.completions_url, json=request_body, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            return CompletionFailure(message=f"{exc.__class__.__name__}: {exc}")

        if http_response.is_error:
            return CompletionFailure(
                message=f"provider returned HTTP {http_response.status_code}",
                status_code=http_response.status_code,
                body=self._clip(http_response.text, PAYLOAD_LOG_LIMIT),
            )

        try:
            response = http_response.json()
            text = self._first_choice_text(response)
        except (ValueError, LookupError, TypeError) as exc:
            return CompletionFailure(message=f"malformed provider reply: {exc}")

        logger.info(
            "llm.response model=%s text_chars=%d",
            self.params.model,
            len(text or ""),
        )
        logger.debug("llm.response.payload=%s", self._clip(self._to_json(response), PAYLOAD_LOG_LIMIT))
        return CompletionSuccess(text=text)

    @staticmethod
    def _first_choice_text(response: Any) -> str | None:
        choices = response["choices"]
        if not choices:
            raise LookupError("reply has no choices")
        first = choices[0]
        if not isinstance(first, Mapping):
            raise TypeError(f"choice is {type(first).__name__}")
        text = first.get("text")
        if text is not None and not isinstance(text, str):
            raise TypeError(f"choice text is {type(text).__name__}")
        return text

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"

    @staticmethod
    def _to_json(payload: Any) -> str:
        try:
            return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError):
            return str(payload)
