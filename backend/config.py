"""Configuration and settings for ClauseFinder application.

Uses Pydantic Settings for fail-fast validation on startup.
Scoring constants are settings too, so deployments and tests can pin them.
"""

import logging
import sys
from functools import lru_cache
from typing import TYPE_CHECKING, Any, TextIO

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from services.scoring import ScoringPolicy


def setup_logging(level: str = "INFO", stream: TextIO = sys.stdout) -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        stream: Where log lines go (stderr when stdout carries a protocol)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(stream)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Raises ValidationError on startup if a value is malformed.
    """

    model_config = SettingsConfigDict(
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # Document Processing Limits
    max_file_size_mb: int = Field(default=10, description="Max upload size in MB")
    line_tolerance: float = Field(
        default=2.0,
        description="Max vertical distance (PDF units) for fragments on one line",
    )

    # Clause Search Defaults
    default_max_results: int = Field(
        default=5, description="Result cap when the caller does not pass one"
    )
    default_excerpt_max_chars: int = Field(
        default=800, description="Excerpt length when the caller does not pass one"
    )

    # Scoring Policy
    phrase_bonus: int = Field(default=50, description="Points for a full phrase match")
    token_weight: int = Field(default=5, description="Points per token occurrence")
    token_occurrence_cap: int = Field(
        default=10, description="Occurrences counted per token at most"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the log level is one logging understands."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("max_file_size_mb", "token_occurrence_cap")
    @classmethod
    def validate_positive(cls, v: int, info) -> int:
        """Ensure limits are positive."""
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def scoring_policy(self) -> "ScoringPolicy":
        """Build the scoring policy from settings."""
        from services.scoring import ScoringPolicy

        return ScoringPolicy(
            phrase_bonus=self.phrase_bonus,
            token_weight=self.token_weight,
            token_occurrence_cap=self.token_occurrence_cap,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# CORS Configuration
CORS_CONFIG: dict[str, Any] = {
    "allow_origins": ["*"],
    "allow_credentials": False,
    "allow_methods": ["GET", "POST", "OPTIONS"],
    "allow_headers": ["Content-Type"],
    "expose_headers": ["X-Request-ID"],
    "max_age": 600,
}

# FastAPI App Configuration
APP_CONFIG: dict[str, Any] = {
    "title": "ClauseFinder",
    "description": (
        "Deterministic clause search over PDF documents. "
        "Upload a PDF and get verbatim, page-cited excerpts for a query."
    ),
    "version": "0.1.0",
    "docs_url": "/api/docs",
    "redoc_url": "/api/redoc",
    "openapi_url": "/api/openapi.json",
    "openapi_tags": [
        {
            "name": "Health",
            "description": "Health check and service status",
        },
        {
            "name": "Documents",
            "description": "PDF ingestion and clause search",
        },
        {
            "name": "Tools",
            "description": "Tool-call interface for agents",
        },
    ],
}


def get_app_config() -> dict[str, Any]:
    """Get FastAPI application configuration."""
    return APP_CONFIG.copy()


def get_cors_config() -> dict[str, Any]:
    """Get CORS middleware configuration."""
    return CORS_CONFIG.copy()
