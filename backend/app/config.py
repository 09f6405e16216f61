"""
News Archive API — Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values are read from environment variables (or a ``.env`` file),
       coerced to their declared types and validated once at import time.
Who:   Imported by the app factory, the database layer and the routes.

Environment names accepted for compatibility with existing deployments:
    MONGODB_URI   → mongodb_uri
    PORT          → backend_port (BACKEND_PORT also works)
"""

from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development against a
    MongoDB instance on localhost.
    """

    # ── MongoDB ───────────────────────────────────────────────────────────
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        validation_alias=AliasChoices("mongodb_uri", "MONGODB_URI"),
        description="MongoDB connection string",
    )
    mongodb_database: str = Field(default="allfunds", min_length=1)
    news_collection: str = Field(default="news", min_length=1)

    # Server selection timeout handed to the driver; a store that cannot be
    # reached fails the request after this many milliseconds.
    mongodb_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    @field_validator("mongodb_uri")
    @classmethod
    def validate_mongodb_uri(cls, v: str) -> str:
        """Only the two schemes understood by pymongo are accepted."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                "MONGODB_URI must start with 'mongodb://' or 'mongodb+srv://'"
            )
        return v

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated list; "*" allows any origin.
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("backend_port", "BACKEND_PORT", "PORT"),
    )

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

    # ── Seeding ───────────────────────────────────────────────────────────
    # When true, POST /api/news/init is a no-op on a non-empty collection.
    seed_skip_when_populated: bool = Field(default=True)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }


# Singleton instance — imported throughout the application
settings = Settings()
