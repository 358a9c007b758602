import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse

from prompt_gateway.api.schemas import GenerateRequest, GenerateResponse
from prompt_gateway.client.controller import FormController
from prompt_gateway.config import Settings, get_settings
from prompt_gateway.providers.llm.echo import EchoCompletionProvider
from prompt_gateway.providers.llm.openai_completion import OpenAICompletionProvider
from prompt_gateway.service.gateway import CompletionGateway, CompletionProvider
from prompt_gateway.web.page import render_index

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate-response"
INVALID_BODY_MESSAGE = "Invalid request body"


def build_provider(settings: Settings) -> CompletionProvider:
    if settings.completion_provider == "echo":
        return EchoCompletionProvider()
    return OpenAICompletionProvider(settings)


def create_app(settings: Settings | None = None, provider: CompletionProvider | None = None) -> FastAPI:
    settings = settings or get_settings()
    if not settings.has_credential:
        logger.warning("config.missing OPENAI_API_KEY; completion requests will fail")

    app = FastAPI(title="prompt-gateway", version="0.1.0")
    app.state.gateway = CompletionGateway(
        provider=provider or build_provider(settings),
        api_key=settings.openai_api_key,
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("gateway.rejected reason=invalid_body errors=%d", len(exc.errors()))
        return JSONResponse(
            status_code=400,
            content=GenerateResponse.failure(INVALID_BODY_MESSAGE).model_dump(),
        )

    @app.get("/healthz")
    async def healthz() -> dict:
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse(render_index(FormController(GENERATE_PATH)))

    @app.post(
        GENERATE_PATH,
        responses={
            200: {"model": GenerateResponse, "description": "Completion text, possibly null."},
            400: {"model": GenerateResponse, "description": "No prompt given or invalid request body."},
            500: {"model": GenerateResponse, "description": "Missing credential or provider failure."},
        },
    )
    async def generate_response(request: Request, req: GenerateRequest | None = None) -> JSONResponse:
        gateway: CompletionGateway = request.app.state.gateway
        reply = await gateway.handle(req.prompt if req else None)
        return JSONResponse(status_code=reply.status_code, content=reply.payload.model_dump())

    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    uvicorn.run("prompt_gateway.api.app:app", host=settings.app_host, port=settings.app_port)
