"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

The registry limits default to the reference behaviour: five simultaneously
active links, six-character generated codes and a 30 minute default validity.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    max_active_links: int = Field(default=5, ge=1)
    code_length: int = Field(default=6, ge=1)
    # Generator retries before giving up with CodeSpaceExhaustedError
    code_max_attempts: int = Field(default=10, ge=1)
    default_validity_minutes: int = Field(default=30, ge=1)
    # Longest allowed lifetime, ten years
    max_validity_minutes: int = Field(default=5_256_000, ge=1, le=52_560_000)
    # Codes shadowed by the app's own routes
    reserved_codes: list[str] = ["api", "docs", "health", "openapi.json", "redoc"]


class StorageSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # "memory" keeps links for the lifetime of the process only
    storage_backend: Literal["memory", "mongo"] = "memory"
    mongodb_uri: Optional[str] = None
    db_name: str = "url-shortener"
    links_collection: str = "links"

    @model_validator(mode="after")
    def _require_uri_for_mongo(self) -> "StorageSettings":
        if self.storage_backend == "mongo" and not self.mongodb_uri:
            raise ValueError("MONGODB_URI is required when STORAGE_BACKEND=mongo")
        return self


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production

    # Sampling rates (0.0–1.0)
    sample_rate_redirect: float = 0.05
    sample_rate_stats: float = 0.20


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_url: str = "http://localhost:8000"
    app_name: str = "shortlink"

    cors_origins: list[str] = ["*"]

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    registry: Optional[RegistrySettings] = None
    storage: Optional[StorageSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Populate sub-configs from the same env/dotenv source
        if self.registry is None:
            self.registry = RegistrySettings()
        if self.storage is None:
            self.storage = StorageSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        self.app_url = self.app_url.rstrip("/")
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
