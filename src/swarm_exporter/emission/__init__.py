"""Emission layer: map snapshots onto Prometheus gauges."""

from swarm_exporter.emission.adapter import Sample, build_families, empty_families, iter_samples
from swarm_exporter.emission.schema import SERVICE_METRICS, MetricSchema

__all__ = [
    "MetricSchema",
    "SERVICE_METRICS",
    "Sample",
    "build_families",
    "empty_families",
    "iter_samples",
]
