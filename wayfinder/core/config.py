"""
Configuration management for the Wayfinder profile service.

This module centralizes environment-driven configuration using Pydantic's
`BaseSettings`. All services consume the shared `settings` instance to ensure
consistent configuration across the stack.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import AnyUrl, Field, PositiveFloat, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # General application settings
    API_TITLE: str = "Wayfinder API"
    API_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = Field("development", pattern=r"^(development|staging|production)$")
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])

    # Solid pods
    DEMO_POD_SERVER: str = "http://localhost:3002"
    POD_FETCH_TIMEOUT_SECONDS: PositiveFloat = 4.0
    POD_FETCH_RETRIES: int = Field(1, ge=0)
    POD_RETRY_BACKOFF_SECONDS: float = Field(1.0, ge=0)
    POD_ACCEPT_HEADER: str = "text/turtle, application/ld+json, application/json"
    PROFILE_CACHE_TTL_SECONDS: PositiveFloat = 300.0

    # Pod proxy for network-isolated environments
    POD_PROXY_ENABLED: bool = False
    POD_PROXY_BASE_URL: str = "http://localhost:8080"
    POD_PROXY_ALLOWED_HOSTS: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["localhost:3002", "127.0.0.1:3002"]
    )

    # Relationship graph
    GOVERNMENT_DOMAIN_SUFFIXES: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [".gov.uk", ".gov.example"]
    )

    # Audit
    AUDIT_LOG_MAX_ENTRIES: int = Field(1000, gt=0)

    # Monitoring / tracing
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[AnyUrl] = None
    OTEL_EXPORTER_OTLP_HEADERS: Optional[str] = None

    @field_validator("ALLOWED_ORIGINS", "POD_PROXY_ALLOWED_HOSTS", "GOVERNMENT_DOMAIN_SUFFIXES", mode="before")
    def _split_list(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value or []


@lru_cache()
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


# Singleton-style settings instance for modules that prefer direct access.
settings = get_settings()
