"""Observation layer: list swarm services and tasks from Docker."""

from swarm_exporter.observation.fetcher import ClusterFetcher, DockerSwarmFetcher, parse_timestamp
from swarm_exporter.observation.models import EPOCH, Service, ServiceMode, Task

__all__ = [
    "ClusterFetcher",
    "DockerSwarmFetcher",
    "EPOCH",
    "Service",
    "ServiceMode",
    "Task",
    "parse_timestamp",
]
