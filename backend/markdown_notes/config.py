"""
Markdown Notes Backend - Application Configuration
====================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values come from environment variables (or a .env file), are validated
       on import and exposed through the `settings` singleton.
Who:   Imported by the database layer, the markdown processor and main.py.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Attributes are grouped by concern.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///<path> or postgresql+asyncpg://user:pw@host/db
    database_url: str = Field(
        default="sqlite+aiosqlite:///./markdown_notes.db",
        description="Async SQLAlchemy connection URL",
    )

    # Pool sizing only applies to server databases; SQLite ignores it
    db_pool_size: int = Field(default=20, ge=5, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # Create the `notes` table on startup instead of relying on Alembic.
    # Handy for local SQLite runs; production deployments run migrations.
    auto_create_schema: bool = Field(default=False)

    # ── Markdown ──────────────────────────────────────────────────────────
    # markdown-it-py preset: commonmark (strict CommonMark), default (adds tables,
    # strikethrough), zero (paragraphs only)
    markdown_preset: str = Field(default="commonmark")

    # Whether raw HTML blocks in markdown are passed through on render
    markdown_html: bool = Field(default=True)

    @field_validator("markdown_preset")
    @classmethod
    def validate_markdown_preset(cls, v: str) -> str:
        """Ensures the preset is one markdown-it-py ships with."""
        valid_presets = {"commonmark", "default", "zero"}
        lower = v.lower()
        if lower not in valid_presets:
            raise ValueError(f"Invalid markdown_preset '{v}'. Must be one of: {valid_presets}")
        return lower

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated list; the Vite dev server runs on 5173
    cors_origins: str = Field(default="http://localhost:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=5200, ge=1024, le=65535)

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
    }


# Singleton instance, imported throughout the application
settings = Settings()
