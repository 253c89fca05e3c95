# config.py
# Pydantic v2 / pydantic-settings v2

from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration.
    - Values come from environment variables and the .env file (if present).
    - OPENAI_API_KEY may be missing (tests, local runs); the generator checks
      for it before making an outbound call.
    - The object is frozen: it is built once at startup and only read afterwards.
    """

    # Bearer token for the chat-completion API
    openai_api_key: Optional[str] = None

    # Env vars: OPENAI_MODEL, OPENAI_EMBEDDING_MODEL
    openai_model: str = Field(default="gpt-4o-mini")
    # Reserved, not used by /api/ai/ask yet
    openai_embedding_model: str = Field(default="text-embedding-3-small")

    openai_url: str = Field(
        default="https://api.openai.com/v1/chat/completions"
    )

    # Timeout of the outbound HTTP call (sec)
    # Env var: REQUEST_TIMEOUT_SEC
    request_timeout_sec: int = Field(default=60)

    # Front-end dev server
    # Env var: CORS_ORIGINS (JSON list)
    cors_origins: List[str] = Field(default=["http://localhost:5173"])

    # Used when the client does not send currentPart ("whole model")
    default_part_name: str = Field(default="전체 모델")

    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
    )


settings = Settings()
