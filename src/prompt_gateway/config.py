from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_model: str = Field(default="text-davinci-003", alias="OPENAI_MODEL")
    llm_timeout_seconds: float = Field(default=60.0, alias="LLM_TIMEOUT_SECONDS")
    completion_provider: Literal["openai", "echo"] = Field(default="openai", alias="COMPLETION_PROVIDER")

    gateway_url: str = Field(
        default="http://127.0.0.1:8000/api/generate-response",
        alias="GATEWAY_URL",
    )
    app_host: str = Field(default="127.0.0.1", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")

    def model_post_init(self, __context: Any) -> None:  # type: ignore[override]
        self.openai_api_key = self.openai_api_key.strip()
        self.openai_base_url = self.openai_base_url.strip().rstrip("/")
        self.openai_model = self.openai_model.strip() or "text-davinci-003"

    @property
    def has_credential(self) -> bool:
        return bool(self.openai_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
