from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Client Data Compiler API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    # File upload & storage
    upload_dir: str = "uploads"
    templates_dir: str = "templates"
    max_upload_size_mb: int = 32

    # Batch validation
    validation_batch_threshold: int = 100
    validation_workers: int = 10

    # Number of records echoed back after an upload
    preview_size: int = 5

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"
    log_level_http: str = "WARNING"
    log_level_uvicorn: str = "INFO"
    log_level_pipeline: str = "INFO"

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance; reads .env once."""
    return Settings()
