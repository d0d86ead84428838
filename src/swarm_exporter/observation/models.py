"""Structured models for Docker Swarm services and tasks."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

REPLICATED = "replicated"
GLOBAL = "global"


class ServiceMode(BaseModel):
    """Scheduling mode of a service."""

    kind: str  # replicated | global | replicated-job | global-job | ...
    replicas: int | None = Field(
        default=None,
        ge=0,
        description="Requested replica count; only meaningful for replicated services",
    )

    @property
    def desired_replicas(self) -> int | None:
        if self.kind != REPLICATED:
            return None
        return self.replicas


class Service(BaseModel):
    """A swarm service as listed by the Docker API."""

    id: str
    name: str
    mode: ServiceMode
    image: str = ""


class Task(BaseModel):
    """A swarm task (one scheduled instance of a service)."""

    id: str
    service_id: str = Field(default="", description="ID of the owning service; may reference no known service")
    state: str  # open set: new, pending, running, complete, failed, shutdown, rejected, ...
    state_timestamp: datetime = EPOCH
