from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root and .env so it loads even if you start uvicorn from a subfolder
PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    # Loads from OS environment first; .env is used for local dev
    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # REST Countries
    RESTCOUNTRIES_BASE_URL: str = "https://restcountries.com"
    RESTCOUNTRIES_FIELDS: str = "name,capital,population,flags,languages"
    # None means wait forever
    REQUEST_TIMEOUT: Optional[float] = None

    # Search behaviour
    DEBOUNCE_DELAY_MS: int = 300
    MAX_LISTED_RESULTS: int = 10
    DETAIL_CACHE_ENABLED: bool = False

    # Server
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000


settings = Settings()


@lru_cache
def get_settings() -> Settings:
    return settings
