"""
Personal Logger — Application Configuration
============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before the app starts.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have working defaults for a single-device deployment.
    Attributes are grouped by concern.
    """

    # ── Storage ───────────────────────────────────────────────────────────
    # What: Async SQLite connection string using the aiosqlite driver
    # Format: sqlite+aiosqlite:///<path>  (":memory:" for an in-memory store)
    # The file name is the fixed database identifier.
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/PersonalLogger.db",
        description="Async SQLAlchemy URL of the embedded entry store",
    )

    # What: How many entries the recency query returns when no usable limit is given
    recent_limit_default: int = Field(default=10, ge=1, le=1000)

    # ── Environment ───────────────────────────────────────────────────────
    # production turns on the https redirect and long static asset caching
    environment: str = Field(default="development")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensures environment is one of the known deployment modes."""
        valid = {"development", "production", "test"}
        lower = v.lower()
        if lower not in valid:
            raise ValueError(f"Invalid environment '{v}'. Must be one of: {valid}")
        return lower

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (split by the property below)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    # What: Directory holding the PWA shell (index.html, sw.js, manifest.json)
    # Unset means the service answers API and health routes only.
    static_root: Optional[str] = Field(default=None)

    @property
    def static_max_age(self) -> int:
        """Cache lifetime for static assets: one day in production, none otherwise."""
        return 86400 if self.is_production else 0

    # What: Controls verbosity of application logging
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()
