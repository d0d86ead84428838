"""Per-scrape summaries derived from services and their tasks."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from swarm_exporter.observation.models import EPOCH

RUNNING = "running"


class ServiceSnapshot(BaseModel):
    """Summary of one service's tasks at scrape time."""

    name: str
    desired_replicas: int | None = Field(
        default=None,
        description="Requested replicas; None unless the service is replicated",
    )
    task_state_counts: dict[str, int] = Field(
        default_factory=lambda: {RUNNING: 0},
        description="task state -> number of tasks in that state; always has 'running'",
    )
    image: str = ""
    last_change_time: datetime = Field(
        default=EPOCH,
        description="Latest task state transition; the epoch when the service has no tasks",
    )

    @property
    def task_count(self) -> int:
        return sum(self.task_state_counts.values())
