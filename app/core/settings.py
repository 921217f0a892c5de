"""
Application settings loaded from environment (.env).
Single source of truth with validation at import time.
"""
from pathlib import Path
from typing import List

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Validated configuration from env and .env file."""

    model_config = SettingsConfigDict(
        env_file=_project_root() / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    base_dir: Path = Path(__file__).resolve().parent.parent.parent

    # Server (run.py)
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    reload: bool = False

    # Ops
    log_level: str = "INFO"
    log_file: str = "logs/social_media.log"

    # MySQL
    mysql_host: str = "localhost"
    mysql_port: int = 3306
    mysql_user: str = "root"
    mysql_password: str = ""
    mysql_database: str = "social_media"

    # CORS: comma-separated origins (stored as str to avoid JSON parse from env)
    cors_allow_origins_str: str = Field(default="*", validation_alias="CORS_ALLOW_ORIGINS")

    @computed_field
    @property
    def cors_allow_origins(self) -> List[str]:
        origins = [x.strip() for x in self.cors_allow_origins_str.split(",") if x.strip()]
        return origins or ["*"]


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
