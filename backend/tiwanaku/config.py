"""Application configuration settings."""
import json
import os
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (TIWANAKU_ prefix)."""

    # App settings
    app_name: str = "Tiwanaku Board Generator"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS settings - as comma-separated string or JSON array
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Generation settings
    step_max_tries: int = 25
    grow_groups_max_tries: int = 5
    max_generation_attempts: int = 1000

    model_config = SettingsConfigDict(
        env_prefix="TIWANAKU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("step_max_tries", "grow_groups_max_tries", "max_generation_attempts")
    @classmethod
    def check_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"unknown log level: {value}")
        return level

    def get_cors_origins(self) -> List[str]:
        """Parse CORS origins from string (comma-separated or JSON)."""
        if not self.cors_origins:
            return ["http://localhost:5173"]

        # Try JSON parse first
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            pass

        # Fall back to comma-separated
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Don't use lru_cache so env var updates are picked up in debug mode
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get settings instance (cached unless TIWANAKU_DEBUG is set)."""
    global _settings
    if _settings is None or os.getenv("TIWANAKU_DEBUG", "false").lower() == "true":
        _settings = Settings()
    return _settings
