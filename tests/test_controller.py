import asyncio

import httpx

from prompt_gateway.api.app import create_app
from prompt_gateway.client.cli import ask
from prompt_gateway.client.controller import (
    IDLE_LABEL,
    LOADING_LABEL,
    TRANSPORT_ERROR_MESSAGE,
    FormController,
)
from prompt_gateway.config import Settings
from prompt_gateway.providers.llm.outcome import CompletionSuccess

URL = "http://testserver/api/generate-response"


class _LabelProbeProvider:
    """Records the controller's button label while the provider call is in flight."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.controller: FormController | None = None
        self.labels_in_flight: list[str] = []

    async def complete(self, prompt: str) -> CompletionSuccess:
        assert self.controller is not None
        self.labels_in_flight.append(self.controller.submit_label)
        return CompletionSuccess(text=self.text)


def _asgi_controller(provider, api_key: str = "sk-test") -> FormController:
    app = create_app(settings=Settings(OPENAI_API_KEY=api_key), provider=provider)
    return FormController(URL, transport=httpx.ASGITransport(app=app))


def test_say_hello_end_to_end() -> None:
    provider = _LabelProbeProvider("Hello there!")
    controller = _asgi_controller(provider)
    provider.controller = controller

    controller.update_prompt("Say hello")
    assert controller.submit_label == IDLE_LABEL
    assert controller.display_text == ""

    result = asyncio.run(controller.submit())

    assert result is not None
    assert result.result == "Hello there!"
    assert controller.display_text == "Hello there!"
    assert provider.labels_in_flight == [LOADING_LABEL]
    assert controller.submit_label == IDLE_LABEL
    assert controller.submit_disabled is False


def test_empty_prompt_end_to_end_shows_message() -> None:
    provider = _LabelProbeProvider("unused")
    controller = _asgi_controller(provider)

    asyncio.run(controller.submit())

    assert controller.result is not None
    assert controller.result.result is None
    assert controller.result.error is not None
    assert controller.display_text == "No prompt given"
    assert provider.labels_in_flight == []


def test_transport_failure_becomes_visible_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    controller = FormController(URL, transport=httpx.MockTransport(handler))
    controller.update_prompt("Say hello")

    asyncio.run(controller.submit())

    assert controller.loading is False
    assert controller.display_text == TRANSPORT_ERROR_MESSAGE


def test_non_json_reply_becomes_visible_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    controller = FormController(URL, transport=httpx.MockTransport(handler))
    controller.update_prompt("Say hello")

    asyncio.run(controller.submit())

    assert controller.display_text == TRANSPORT_ERROR_MESSAGE


def test_submit_while_loading_is_ignored() -> None:
    calls: list[str] = []

    async def scenario():
        started = asyncio.Event()
        release = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.content.decode())
            started.set()
            await release.wait()
            return httpx.Response(200, json={"result": "ok", "error": None})

        controller = FormController(URL, transport=httpx.MockTransport(handler))
        controller.update_prompt("hi")
        first = asyncio.create_task(controller.submit())
        await started.wait()
        assert controller.submit_disabled is True
        assert controller.submit_label == LOADING_LABEL
        second = await controller.submit()
        release.set()
        return controller, await first, second

    controller, first, second = asyncio.run(scenario())

    assert second is None
    assert first is not None and first.result == "ok"
    assert len(calls) == 1
    assert controller.submit_disabled is False


def test_cli_prints_text_and_exit_code(capsys) -> None:
    provider = _LabelProbeProvider("Hello there!")
    controller = _asgi_controller(provider)
    provider.controller = controller

    code = asyncio.run(ask(controller, "Say hello"))
    assert code == 0
    assert capsys.readouterr().out.strip() == "Hello there!"

    code = asyncio.run(ask(controller, ""))
    assert code == 1
    assert capsys.readouterr().out.strip() == "No prompt given"
