from pydantic import BaseModel, Field, model_validator


class GenerateRequest(BaseModel):
    prompt: str | None = Field(default=None, description="Free-text prompt forwarded to the completion provider.")


class ResponseError(BaseModel):
    message: str


class GenerateResponse(BaseModel):
    """Uniform payload for every gateway reply.

    A completion sets ``result`` (which may still be null when the provider
    returned no text); a failure sets ``error``. Both at once is rejected.
    """

    result: str | None = None
    error: ResponseError | None = None

    @model_validator(mode="after")
    def _check_single_branch(self) -> "GenerateResponse":
        if self.result is not None and self.error is not None:
            raise ValueError("result and error are mutually exclusive")
        return self

    @classmethod
    def success(cls, text: str | None) -> "GenerateResponse":
        return cls(result=text or None, error=None)

    @classmethod
    def failure(cls, message: str) -> "GenerateResponse":
        return cls(result=None, error=ResponseError(message=message))

    @property
    def display_text(self) -> str:
        if self.result is not None:
            return self.result
        if self.error is not None:
            return self.error.message
        return ""
