from prompt_gateway.providers.llm.outcome import CompletionOutcome, CompletionSuccess


class EchoCompletionProvider:
    """Offline provider for local development; answers with the prompt itself."""

    def __init__(self) -> None:
        self.calls = 0

    async def complete(self, prompt: str) -> CompletionOutcome:
        self.calls += 1
        return CompletionSuccess(text=f"[echo] {prompt}")
