"""Configuration and environment for the swarm exporter."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Exporter settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_prefix="SWARM_EXPORTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HTTP endpoint
    listen_host: str = Field(default="0.0.0.0", description="Address the metrics endpoint binds to")
    listen_port: int = Field(default=9675, ge=1, le=65535, description="Port the metrics endpoint listens on")
    metrics_path: str = Field(default="/metrics", description="Path serving the exposition text")

    # Docker
    docker_host: str | None = Field(
        default=None,
        description="Docker daemon URL; uses DOCKER_HOST and related env vars if unset",
    )
    docker_timeout: float = Field(
        default=10.0,
        gt=0.0,
        description="Timeout in seconds for each Docker API call",
    )
    docker_api_version: str = Field(
        default="auto",
        description="Docker API version to speak, or 'auto' to negotiate",
    )

    # Exposition
    include_runtime_metrics: bool = Field(
        default=False,
        description="Also expose process, platform and GC metrics of the exporter itself",
    )


def get_settings(**overrides: Any) -> Settings:
    """Return validated settings instance; explicit overrides win over env and .env."""
    return Settings(**overrides)
