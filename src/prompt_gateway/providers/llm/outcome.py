from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class CompletionParams:
    """Fixed generation parameters sent with every prompt."""

    model: str
    temperature: float = 0.6
    max_tokens: int = 2048
    frequency_penalty: float = 0.5
    presence_penalty: float = 0.0

    def request_body(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "prompt": prompt,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "frequency_penalty": self.frequency_penalty,
            "presence_penalty": self.presence_penalty,
        }


@dataclass(frozen=True)
class CompletionSuccess:
    text: str | None


@dataclass(frozen=True)
class CompletionFailure:
    """Provider call that did not yield a completion.

    ``status_code`` and ``body`` are set only when the provider answered with
    an HTTP error; transport problems and malformed replies carry just the
    message.
    """

    message: str
    status_code: int | None = None
    body: str | None = None

    @property
    def has_response(self) -> bool:
        return self.status_code is not None

    def log_detail(self) -> str:
        if self.has_response:
            return f"status_code={self.status_code} body={self.body or ''}"
        return f"message={self.message}"


CompletionOutcome = Union[CompletionSuccess, CompletionFailure]
