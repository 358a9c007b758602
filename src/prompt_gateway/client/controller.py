import logging

import httpx

from prompt_gateway.api.schemas import GenerateResponse

logger = logging.getLogger(__name__)

IDLE_LABEL = "Submit Prompt"
LOADING_LABEL = "Loading..."
TRANSPORT_ERROR_MESSAGE = "Request failed. Please try again."
DEFAULT_TIMEOUT_SECONDS = 90.0


class FormController:
    """State behind the prompt form: current text, loading flag, last result.

    ``submit`` posts the prompt to the gateway and stores whatever uniform
    payload comes back. When the gateway itself cannot be reached the result
    becomes a generic error so the view never stays blank.
    """

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self.prompt = ""
        self.loading = False
        self.result: GenerateResponse | None = None

    def update_prompt(self, text: str) -> None:
        self.prompt = text

    @property
    def submit_label(self) -> str:
        return LOADING_LABEL if self.loading else IDLE_LABEL

    @property
    def submit_disabled(self) -> bool:
        return self.loading

    @property
    def display_text(self) -> str:
        if self.result is None:
            return ""
        return self.result.display_text

    async def submit(self) -> GenerateResponse | None:
        if self.loading:
            logger.info("form.submit.ignored reason=in_flight")
            return None

        self.loading = True
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                http_response = await client.post(self.url, json={"prompt": self.prompt})
            self.result = GenerateResponse.model_validate(http_response.json())
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("form.submit.failed url=%s type=%s detail=%s", self.url, exc.__class__.__name__, exc)
            self.result = GenerateResponse.failure(TRANSPORT_ERROR_MESSAGE)
        finally:
            self.loading = False
        return self.result
