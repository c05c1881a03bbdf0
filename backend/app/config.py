import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Pet Registry API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["http://localhost:4200", "http://127.0.0.1:4200"]

    # Secret stretched into the owner-name encryption key. Required.
    encryption_key: str = Field(..., min_length=1)

    # Store
    seed_sample_data: bool = True
    default_page_size: int = 6
    max_page_size: int = 100

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_http_requests: str = "INFO"    # RequestLogger middleware
    log_level_cipher: str = "WARNING"        # Field encryption / decrypt failures
    log_level_store: str = "INFO"            # Pet service and in-memory store

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once.

    Raises pydantic's ValidationError when ENCRYPTION_KEY is missing, which
    aborts application startup.
    """
    settings = Settings()
    _config_logger.debug("Settings loaded for environment '%s'", settings.app_env)
    return settings
