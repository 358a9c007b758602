import logging
from dataclasses import dataclass
from typing import Protocol

from prompt_gateway.api.schemas import GenerateResponse
from prompt_gateway.providers.llm.outcome import CompletionFailure, CompletionOutcome

logger = logging.getLogger(__name__)
ERROR_LOG_LIMIT = 1000

MISSING_CREDENTIAL_MESSAGE = "OpenAI API key not configured."
NO_PROMPT_MESSAGE = "No prompt given"
REQUEST_FAILED_MESSAGE = "An error occurred during your request."


class CompletionProvider(Protocol):
    async def complete(self, prompt: str) -> CompletionOutcome: ...


@dataclass(frozen=True)
class GatewayReply:
    status_code: int
    payload: GenerateResponse


class CompletionGateway:
    """Validate a prompt, forward it once, and map the outcome to a uniform reply."""

    def __init__(self, provider: CompletionProvider, api_key: str) -> None:
        self.provider = provider
        self.api_key = api_key

    async def handle(self, prompt: str | None) -> GatewayReply:
        if not self.api_key:
            logger.error("gateway.rejected reason=missing_credential")
            return GatewayReply(500, GenerateResponse.failure(MISSING_CREDENTIAL_MESSAGE))

        if not prompt:
            logger.info("gateway.rejected reason=empty_prompt")
            return GatewayReply(400, GenerateResponse.failure(NO_PROMPT_MESSAGE))

        logger.info("gateway.request prompt_chars=%d", len(prompt))
        try:
            outcome = await self.provider.complete(prompt)
        except Exception as exc:
            logger.exception("llm.error type=%s", exc.__class__.__name__)
            return GatewayReply(500, GenerateResponse.failure(REQUEST_FAILED_MESSAGE))

        if isinstance(outcome, CompletionFailure):
            logger.error("llm.error detail=%s", self._clip(outcome.log_detail(), ERROR_LOG_LIMIT))
            return GatewayReply(500, GenerateResponse.failure(REQUEST_FAILED_MESSAGE))

        logger.info("gateway.completed text_chars=%d", len(outcome.text or ""))
        return GatewayReply(200, GenerateResponse.success(outcome.text))

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        if len(text) <= limit:
            return text
        return f"{text[:limit]}...(truncated)"
