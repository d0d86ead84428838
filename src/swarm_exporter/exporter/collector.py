"""prometheus_client collector that scrapes the swarm on every collection."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from prometheus_client import GCCollector, PlatformCollector, ProcessCollector
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector, CollectorRegistry

from swarm_exporter.config import Settings
from swarm_exporter.emission import SERVICE_METRICS, MetricSchema, build_families, empty_families, iter_samples
from swarm_exporter.errors import ScrapeError
from swarm_exporter.exporter.orchestrator import run_scrape
from swarm_exporter.observation import ClusterFetcher

logger = logging.getLogger(__name__)


class SwarmServiceCollector(Collector):
    """Publishes one set of service gauges per collection; holds no state between them."""

    def __init__(self, fetcher: ClusterFetcher, schema: Sequence[MetricSchema] = SERVICE_METRICS) -> None:
        self.fetcher = fetcher
        self.schema = schema

    def describe(self) -> Iterable[GaugeMetricFamily]:
        # Lets the registry learn metric names without calling Docker
        return empty_families(self.schema)

    def collect(self) -> Iterable[GaugeMetricFamily]:
        result = run_scrape(self.fetcher)
        if not result.ok:
            logger.warning("Scrape failed after %.3fs: %s", result.duration_seconds, result.error)
            raise ScrapeError(str(result.error)) from result.error
        return build_families(iter_samples(result.snapshots), self.schema)


def build_registry(fetcher: ClusterFetcher, settings: Settings | None = None) -> CollectorRegistry:
    """Create a dedicated registry holding the swarm collector."""
    registry = CollectorRegistry()
    registry.register(SwarmServiceCollector(fetcher))
    if settings is not None and settings.include_runtime_metrics:
        ProcessCollector(registry=registry)
        PlatformCollector(registry=registry)
        GCCollector(registry=registry)
    return registry
