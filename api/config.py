"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Sentinel rendered for values that cannot be displayed
NOT_AVAILABLE = "N/A"

# Artifact filename prefix (report-<session>-<epoch ms>.<ext>)
ARTIFACT_PREFIX = "report"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_workers: int = 1
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Data sources
    sessions_path: Path = Path("data/sessions.json")
    report_configs_path: Path | None = None  # None = bundled default configs

    # Artifacts
    artifacts_dir: Path = Path("generated-reports")

    # Rendering
    renderer: Literal["pdf", "html"] = "pdf"
    render_timeout_seconds: float = 60.0
    pdf_page_format: str = "A4"

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.env == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
