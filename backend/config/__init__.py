import logging
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("factcheck")

from .constants import (
    LLM_CONFIG,
    CLAIM_CONFIG,
    VERDICT_CONFIG,
)


class Settings(BaseSettings):
    """Loads all environment variables into a single, accessible object."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"

    DATABASE_URL: str = "sqlite:///./factcheck.db"
    DB_ECHO: bool = False

    MAX_CLAIM_LENGTH: int = CLAIM_CONFIG.MAX_LENGTH
    CLAIM_SUMMARY_LENGTH: int = CLAIM_CONFIG.SUMMARY_LENGTH

    HISTORY_LIMIT: int = 50
    HISTORY_MAX_LIMIT: int = 200
    TRENDING_LIMIT: int = 5
    TRENDING_MIN_COUNT: int = 2

    OWNER_SCOPED: bool = False
    OWNER_HEADER: str = "X-User-ID"

    CORS_ORIGINS: str = "*"

    @property
    def GEMINI_ENDPOINT(self) -> str:
        return f"{self.GEMINI_BASE_URL.rstrip('/')}/v1beta/models/{self.GEMINI_MODEL}:generateContent"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()] or ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def check_api_keys_on_startup(settings: Settings) -> None:
    """Warn early when the Gemini key is missing; claim checks will fail until it is set."""
    if not settings.GEMINI_API_KEY:
        logger.warning("Missing API keys: GEMINI_API_KEY. Claim analysis requests will fail.")
    else:
        logger.info("All required API keys are configured.")


__all__ = [
    "logger",
    "Settings",
    "get_settings",
    "check_api_keys_on_startup",
    "LLM_CONFIG",
    "CLAIM_CONFIG",
    "VERDICT_CONFIG",
]
