"""Aggregation layer: per-service summaries of swarm tasks."""

from swarm_exporter.aggregation.engine import aggregate, group_tasks_by_service, summarize_service
from swarm_exporter.aggregation.models import RUNNING, ServiceSnapshot

__all__ = [
    "RUNNING",
    "ServiceSnapshot",
    "aggregate",
    "group_tasks_by_service",
    "summarize_service",
]
