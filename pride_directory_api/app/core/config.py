"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables or a dedicated configuration service.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Pride Directory API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Path or connection string for the SQLite document store.  A
    # relative path is resolved relative to the project root by the
    # ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "pride_directory.db")

    # Landing page widgets.  The featured listing is fetched from the
    # newest ``featured_query_limit`` documents and trimmed to
    # ``featured_limit`` tiles.
    featured_limit: int = int(os.getenv("FEATURED_LIMIT", "6"))
    featured_query_limit: int = int(os.getenv("FEATURED_QUERY_LIMIT", "30"))
    upcoming_events_limit: int = int(os.getenv("UPCOMING_EVENTS_LIMIT", "3"))
    related_limit: int = int(os.getenv("RELATED_LIMIT", "3"))

    # Retry policy for the featured listing only.  Attempt ``n`` waits
    # ``n * featured_retry_backoff_seconds`` before re-fetching.
    featured_retry_limit: int = int(os.getenv("FEATURED_RETRY_LIMIT", "3"))
    featured_retry_backoff_seconds: float = float(os.getenv("FEATURED_RETRY_BACKOFF_SECONDS", "2.0"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
