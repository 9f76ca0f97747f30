from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from confsched.core.exceptions import ConfigurationError


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    # Resolve to backend/.env so the service works from any cwd.
    model_config = SettingsConfigDict(
        env_file=str(BACKEND_ENV_FILE),
        env_file_encoding="utf-8",
        env_prefix="CONFSCHED_",
    )

    project_name: str = "Conference Scheduler API"
    api_prefix: str = "/api"

    random_seed: int = 5374857
    worker_count: int = 4
    normalize_weights: bool = True
    parent_draw_attempts: int = 64
    validate_generations: bool = False

    log_level: str = "INFO"
    report_path: str = "schedule.md"

    @field_validator("worker_count", "parent_draw_attempts")
    @classmethod
    def require_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}")
        return level


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid scheduler configuration: {exc}") from exc
