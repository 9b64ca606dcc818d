from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import AppSettings, OllamaModels


class Settings(BaseSettings):
    """Application settings loaded from environment + defaults"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ENVIRONMENT: str = AppSettings.ENVIRONMENT
    OLLAMA_MODEL: OllamaModels = AppSettings.OLLAMA_MODEL
    OLLAMA_BASE_URL: str = AppSettings.OLLAMA_BASE_URL
    LLM_TEMPERATURE: float = AppSettings.LLM_TEMPERATURE
    LLM_MAX_RETRIES: int = AppSettings.LLM_MAX_RETRIES
    EXTRACTOR_TIMEOUT: float = AppSettings.EXTRACTOR_TIMEOUT
    EXTRACTOR_USER_AGENT: str = AppSettings.EXTRACTOR_USER_AGENT
    SKIP_EMPTY_ARTICLES: bool = AppSettings.SKIP_EMPTY_ARTICLES

    @property
    def ollama_config(self) -> dict:
        return {
            "model": self.OLLAMA_MODEL.value,
            "base_url": self.OLLAMA_BASE_URL,
            "temperature": self.LLM_TEMPERATURE,
        }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
