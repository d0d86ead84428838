"""Static definitions of the metrics the exporter publishes."""

from __future__ import annotations

from dataclasses import dataclass

DESIRED_REPLICAS = "swarm_service_desired_replicas"
TASKS = "swarm_service_tasks"
INFO = "swarm_service_info"
CHANGE_TIME = "swarm_service_change_time"


@dataclass(frozen=True)
class MetricSchema:
    """Name, help text and label names of one gauge."""

    name: str
    documentation: str
    labels: tuple[str, ...]


SERVICE_METRICS: tuple[MetricSchema, ...] = (
    MetricSchema(DESIRED_REPLICAS, "Number of replicas requested for this service", ("service_name",)),
    MetricSchema(TASKS, "Number of docker tasks", ("service_name", "state")),
    MetricSchema(INFO, "Information about each service", ("service_name", "image")),
    MetricSchema(CHANGE_TIME, "Time when a task state last changed", ("service_name",)),
)
