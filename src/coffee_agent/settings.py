"""Agent server configuration."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(ENV_FILE, override=False)


class AgentSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="COFFEE_AGENT_", env_file=str(ENV_FILE), extra="ignore")

    host: str = "0.0.0.0"
    port: int = 3008
    log_level: str = "INFO"
    cors_origins: str = "*"

    llm_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GROQ_API_KEY", "OPENAI_API_KEY", "COFFEE_AGENT_LLM_API_KEY"),
    )
    llm_base_url: str | None = "https://api.groq.com/openai/v1"
    llm_model: str = "llama-3.3-70b-specdec"
    temperature: float = 0.0
    llm_timeout_s: float = 30.0

    max_retries_per_step: int = 5
    total_max_retries: int = 10
    max_iterations: int = 15

    mock_llm: bool = False

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> AgentSettings:
    return AgentSettings()
