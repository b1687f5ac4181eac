"""
blog_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, bootstrap admin password).
- Offer a cached settings instance for the process entrypoint.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `BLOG_`).

    The app factory receives an explicit instance and stores it on `app.state`,
    so tests can build isolated apps without touching the environment.
    """

    model_config = SettingsConfigDict(env_prefix="BLOG_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "blog-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "blog-api"
    jwt_audience: str = "blog-api-clients"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    token_ttl_minutes: int = Field(default=60 * 24, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./blog.db"

    # Pagination
    default_per_page: int = Field(default=15, ge=1)
    max_per_page: int = Field(default=100, ge=1)

    # Optional bootstrap administrator, ensured on startup when both are set.
    admin_email: str | None = None
    admin_password: str | None = Field(default=None, repr=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars on repeated lookups.
    return Settings()
